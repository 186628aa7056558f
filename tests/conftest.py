"""Shared fixtures for the duplicate face check tests."""
from typing import List, Optional

import pytest

from face_dedup.core.config import Settings
from face_dedup.core.exceptions import RemoteCallError
from face_dedup.domain.interfaces.recognition.face_search import FaceSearchService
from face_dedup.domain.value_objects.recognition import CandidateMatch, RecognitionQuery


class FakeFaceSearchService(FaceSearchService):
    """Face search returning canned candidates and recording every query."""

    def __init__(self, candidates: Optional[List[CandidateMatch]] = None, error: Optional[Exception] = None):
        self.candidates = candidates or []
        self.error = error
        self.queries: List[RecognitionQuery] = []
        self.timeouts: List[Optional[float]] = []

    async def search_faces(self, query, timeout=None):
        self.queries.append(query)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return list(self.candidates)


def _candidates(count: int) -> List[CandidateMatch]:
    return [
        CandidateMatch(face_id=f"face-{i}", similarity=99.0 - i, external_image_id=f"person-{i}")
        for i in range(count)
    ]


@pytest.fixture
def test_settings():
    """Settings pointing at a test collection."""
    return Settings(REKOGNITION_COLLECTION_ID="test-collection", AWS_REGION="us-east-1")


@pytest.fixture
def make_candidates():
    """Build a number of candidate matches."""
    return _candidates


@pytest.fixture
def make_search():
    """Build a fake face search returning the given number of candidates, or failing."""
    def _make(count: int = 0, error: Optional[Exception] = None) -> FakeFaceSearchService:
        return FakeFaceSearchService(candidates=_candidates(count), error=error)
    return _make


@pytest.fixture
def remote_error():
    return RemoteCallError(
        "Failed to search faces by image: service unavailable",
        details={"collection_id": "test-collection"},
    )
