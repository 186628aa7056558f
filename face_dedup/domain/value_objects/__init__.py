"""Value objects package."""
from .recognition import (
    CandidateMatch,
    OutcomeKind,
    RecognitionQuery,
    SearchOutcome,
)

__all__ = ["CandidateMatch", "OutcomeKind", "RecognitionQuery", "SearchOutcome"]
