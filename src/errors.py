class ReviewIntakeError(Exception):
    """Base class for errors surfaced to the review form caller."""


class MissingFieldsError(ReviewIntakeError, ValueError):
    def __init__(self, missing: list[str] | None = None) -> None:
        self.missing = list(missing or [])
        super().__init__("Missing required fields")


class InvalidWebhookSecretError(ReviewIntakeError, PermissionError):
    def __init__(self) -> None:
        super().__init__("Invalid webhook secret")


class StorageError(ReviewIntakeError, RuntimeError):
    """Raised when the datastore rejects an insert. The message is the driver's, unmodified."""
