from src.models.review import ReviewStatus

APPROVE_BELOW = 0.3
FLAG_AT_OR_ABOVE = 0.7


def decide_status(safety_score: float, action: str) -> ReviewStatus:
    """Map a moderation verdict to a publication status.

    An explicit ``block`` flags the review even when the safety score is low.
    Scores are used as given, without clamping to their nominal range.
    """
    if action == "allow" and safety_score < APPROVE_BELOW:
        return ReviewStatus.APPROVED
    if action == "block" or safety_score >= FLAG_AT_OR_ABOVE:
        return ReviewStatus.FLAGGED
    return ReviewStatus.PENDING
