from __future__ import annotations

import logging

from src.config import settings
from src.models.review import Review, ReviewIntakeResult
from src.pipeline.decision import decide_status
from src.pipeline.moderation import ReviewModerationClient
from src.pipeline.validator import validate_submission, verify_webhook_secret
from src.services.review_store import ReviewStore

LOGGER = logging.getLogger("review_intake")


class ReviewIntakeService:
    """Runs one form submission through validation, moderation, decision and storage.

    Validation errors and ``StorageError`` propagate to the caller. Moderation never
    fails the submission: an unavailable classifier yields the default verdict.
    """

    def __init__(
        self,
        moderation_client: ReviewModerationClient,
        review_store: ReviewStore,
        webhook_secret: str | None = None,
    ) -> None:
        self.moderation_client = moderation_client
        self.review_store = review_store
        self.webhook_secret = webhook_secret

    async def submit(self, payload: object, webhook_secret: str | None = None) -> ReviewIntakeResult:
        submission = validate_submission(payload)
        verify_webhook_secret(self.webhook_secret, webhook_secret)
        LOGGER.info("Submission validated business_id=%s", submission.business_id)

        outcome = await self.moderation_client.classify(submission.content)
        moderation = outcome.result
        LOGGER.info(
            "Submission classified business_id=%s action=%s safety=%s sentiment=%s defaulted=%s",
            submission.business_id,
            moderation.action,
            moderation.safety_score,
            moderation.sentiment_score,
            outcome.defaulted,
        )

        status = decide_status(moderation.safety_score, moderation.action)
        review = Review.from_submission(submission, status=status, sentiment_score=moderation.sentiment_score)

        await self.review_store.insert(review)
        LOGGER.info("Review stored business_id=%s status=%s", submission.business_id, status.value)

        return ReviewIntakeResult(status=status)


def build_review_intake_service() -> ReviewIntakeService:
    return ReviewIntakeService(
        moderation_client=ReviewModerationClient(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
        ),
        review_store=ReviewStore(),
        webhook_secret=settings.webhook_secret or None,
    )
