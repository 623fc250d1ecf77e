import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.routers.reviews import get_review_intake_service, router
from src.services.review_service import ReviewIntakeService
from tests.fakes import FakeModerationClient, FakeReviewStore, defaulted_outcome, moderation_outcome

ENDPOINT = "/api/addReview"


class ExplodingService:
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def submit(self, payload: object, webhook_secret: str | None = None):
        raise self.error


def _client(service: object) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_review_intake_service] = lambda: service
    return TestClient(app)


def _intake(outcome=None, store: FakeReviewStore | None = None, webhook_secret: str | None = None):
    moderation_client = FakeModerationClient(outcome)
    review_store = store or FakeReviewStore()
    service = ReviewIntakeService(
        moderation_client=moderation_client,
        review_store=review_store,
        webhook_secret=webhook_secret,
    )
    return _client(service), moderation_client, review_store


def test_add_review_approves_clean_review(submission_payload: dict) -> None:
    client, _, store = _intake(moderation_outcome(safety_score=0.1, sentiment_score=0.5, action="allow"))

    response = client.post(ENDPOINT, json=submission_payload)

    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": "Review received successfully.", "status": "approved"}
    assert store.inserted[0].status.value == "approved"


def test_add_review_flags_unsafe_review(submission_payload: dict) -> None:
    client, _, store = _intake(moderation_outcome(safety_score=0.9, sentiment_score=-0.2, action="flag"))

    response = client.post(ENDPOINT, json=submission_payload)

    assert response.status_code == 200
    assert response.json()["status"] == "flagged"
    assert store.inserted[0].status.value == "flagged"


def test_add_review_stores_pending_when_moderation_fails(submission_payload: dict) -> None:
    client, _, store = _intake(defaulted_outcome("Moderation request failed: timed out"))

    response = client.post(ENDPOINT, json=submission_payload)

    assert response.status_code == 200
    assert response.json()["status"] == "pending"
    assert store.inserted[0].is_positive is False


def test_add_review_rejects_missing_content(submission_payload: dict) -> None:
    client, moderation_client, store = _intake()
    submission_payload.pop("content")

    response = client.post(ENDPOINT, json=submission_payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}
    assert moderation_client.calls == []
    assert store.inserted == []


@pytest.mark.parametrize("body", [b"", b"not json", b"[1, 2]"])
def test_add_review_treats_unreadable_body_as_missing_fields(body: bytes) -> None:
    client, moderation_client, _ = _intake()

    response = client.post(ENDPOINT, content=body, headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}
    assert moderation_client.calls == []


def test_add_review_rejects_wrong_secret(submission_payload: dict) -> None:
    client, moderation_client, store = _intake(webhook_secret="s3cret")

    response = client.post(ENDPOINT, json=submission_payload, headers={"x-webhook-secret": "nope"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid webhook secret"}
    assert moderation_client.calls == []
    assert store.inserted == []


def test_add_review_accepts_matching_secret(submission_payload: dict) -> None:
    client, _, store = _intake(webhook_secret="s3cret")

    response = client.post(ENDPOINT, json=submission_payload, headers={"x-webhook-secret": "s3cret"})

    assert response.status_code == 200
    assert len(store.inserted) == 1


def test_add_review_returns_storage_error_message(submission_payload: dict) -> None:
    client, moderation_client, _ = _intake(store=FakeReviewStore(error_message="relation reviews is full"))

    response = client.post(ENDPOINT, json=submission_payload)

    assert response.status_code == 500
    assert response.json() == {"error": "relation reviews is full"}
    assert moderation_client.calls == [submission_payload["content"]]


def test_add_review_maps_unexpected_error_to_500(submission_payload: dict) -> None:
    client = _client(ExplodingService(RuntimeError("database is not ready")))

    response = client.post(ENDPOINT, json=submission_payload)

    assert response.status_code == 500
    assert response.json() == {"error": "database is not ready"}


def test_add_review_uses_generic_message_for_blank_error(submission_payload: dict) -> None:
    client = _client(ExplodingService(RuntimeError()))

    response = client.post(ENDPOINT, json=submission_payload)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal error"}


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_add_review_rejects_other_methods(method: str) -> None:
    client, moderation_client, _ = _intake()

    response = client.request(method, ENDPOINT)

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    assert moderation_client.calls == []
