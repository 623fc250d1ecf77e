from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class ReviewStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    FLAGGED = "flagged"


class ReviewSubmission(BaseModel):
    business_id: str | int
    reviewer_name: str
    phone: str
    content: str


class ModerationResult(BaseModel):
    safety_score: float = 0.0
    sentiment_score: float = 0.0
    action: str = "flag"


class ModerationOutcome(BaseModel):
    result: ModerationResult = Field(default_factory=ModerationResult)
    defaulted: bool = False
    reason: str | None = None


class Review(BaseModel):
    business_id: str | int
    reviewer_name: str
    phone: str
    content: str
    status: ReviewStatus
    sentiment_score: float
    is_positive: bool
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_submission(
        cls,
        submission: ReviewSubmission,
        status: ReviewStatus,
        sentiment_score: float,
    ) -> "Review":
        return cls(
            **submission.model_dump(),
            status=status,
            sentiment_score=sentiment_score,
            is_positive=sentiment_score > 0,
        )


class ReviewIntakeResult(BaseModel):
    status: ReviewStatus
