import pytest


@pytest.fixture
def submission_payload() -> dict:
    return {
        "business_id": "biz_123",
        "reviewer_name": "Alice",
        "phone": "+1 555 0100",
        "content": "Great coffee and friendly staff.",
    }
