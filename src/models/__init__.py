from src.models.review import (
    ModerationOutcome,
    ModerationResult,
    Review,
    ReviewIntakeResult,
    ReviewStatus,
    ReviewSubmission,
)

__all__ = [
    "ModerationOutcome",
    "ModerationResult",
    "Review",
    "ReviewIntakeResult",
    "ReviewStatus",
    "ReviewSubmission",
]
