"""Resolution of face search candidates into a check outcome."""
from typing import Sequence

from face_dedup.domain.value_objects.recognition import (
    CandidateMatch,
    OutcomeKind,
    SearchOutcome,
)


def resolve_outcome(candidates: Sequence[CandidateMatch]) -> SearchOutcome:
    """Any candidate at all means the face is already enrolled.

    Candidates are not filtered again here, the search threshold already did that.
    """
    count = len(candidates)
    kind = OutcomeKind.DUPLICATE_DETECTED if count > 0 else OutcomeKind.NO_MATCH
    return SearchOutcome(kind=kind, candidate_count=count)
