from typing import Any

from src.errors import InvalidWebhookSecretError, MissingFieldsError
from src.models.review import ReviewSubmission

REQUIRED_FIELDS = ("business_id", "reviewer_name", "phone", "content")


def _is_blank(value: object) -> bool:
    # Empty lists and objects count as present; NaN counts as blank.
    if isinstance(value, (list, dict)):
        return False
    if isinstance(value, float) and value != value:
        return True
    return not value


def validate_submission(payload: object) -> ReviewSubmission:
    data: dict[str, Any] = payload if isinstance(payload, dict) else {}
    missing = [field for field in REQUIRED_FIELDS if _is_blank(data.get(field))]
    if missing:
        raise MissingFieldsError(missing)

    business_id = data["business_id"]
    if isinstance(business_id, bool) or not isinstance(business_id, (str, int)):
        business_id = str(business_id)

    return ReviewSubmission(
        business_id=business_id,
        reviewer_name=str(data["reviewer_name"]),
        phone=str(data["phone"]),
        content=str(data["content"]),
    )


def verify_webhook_secret(expected: str | None, supplied: str | None) -> None:
    # An unset secret leaves the endpoint open.
    if not expected:
        return
    if supplied != expected:
        raise InvalidWebhookSecretError()
