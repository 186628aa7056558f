"""Tests for the Lambda entry point."""
import pytest
import structlog

from face_dedup.core.config import Settings
from face_dedup.core.container import container
from face_dedup.core.exceptions import (
    ConfigurationError,
    EventDecodeError,
    FaceAlreadyExistsError,
    RemoteCallError,
)
from face_dedup.domain.interfaces.recognition.face_search import FaceSearchService
from face_dedup.handlers.lambda_function import handler, remaining_time


class FakeLambdaContext:
    aws_request_id = "6f1d4c1e-0000-4000-8000-000000000000"

    def __init__(self, remaining_ms: int = 30000):
        self.remaining_ms = remaining_ms

    def get_remaining_time_in_millis(self) -> int:
        return self.remaining_ms


@pytest.fixture
def install(test_settings):
    """Initialize the global container with a fake face search."""
    def _install(search, settings: Settings = test_settings):
        container.initialize(settings=settings, face_search_service=search)
        return search
    yield _install
    container.cleanup()


def test_new_face_returns_message(install, make_search):
    install(make_search(0))

    result = handler({"s3Bucket": "uploads", "s3Key": "caf%C3%A9.jpg"}, FakeLambdaContext())

    assert result == "No matching faces found."


@pytest.mark.parametrize("count", [1, 3])
def test_duplicate_face_propagates(install, make_search, count):
    install(make_search(count))

    with pytest.raises(FaceAlreadyExistsError, match="Face in the picture is already in the system."):
        handler({"s3Bucket": "uploads", "s3Key": "photo.jpg"}, FakeLambdaContext())


def test_remote_failure_propagates(install, make_search, remote_error):
    install(make_search(error=remote_error))

    with pytest.raises(RemoteCallError):
        handler({"s3Bucket": "uploads", "s3Key": "photo.jpg"}, FakeLambdaContext())


def test_decode_failure_propagates(install, make_search):
    search = install(make_search(0))

    with pytest.raises(EventDecodeError):
        handler({"s3Bucket": "uploads", "s3Key": "bad%zz.jpg"}, FakeLambdaContext())
    assert search.queries == []


def test_missing_collection_propagates(install, make_search):
    search = install(make_search(0), Settings(REKOGNITION_COLLECTION_ID=""))

    with pytest.raises(ConfigurationError):
        handler({"s3Bucket": "uploads", "s3Key": "photo.jpg"}, FakeLambdaContext())
    assert search.queries == []


def test_search_deadline_leaves_margin(install, make_search):
    search = install(make_search(0))

    handler({"s3Bucket": "uploads", "s3Key": "photo.jpg"}, FakeLambdaContext(remaining_ms=3000))

    assert search.timeouts == [2.5]


def test_without_context_there_is_no_deadline(install, make_search):
    search = install(make_search(0))

    handler({"s3Bucket": "uploads", "s3Key": "photo.jpg"})

    assert search.timeouts == [None]


def test_handler_initializes_container(monkeypatch, make_search):
    search = make_search(0)
    initialize = container.initialize
    monkeypatch.setattr(
        container,
        "initialize",
        lambda: initialize(Settings(REKOGNITION_COLLECTION_ID="faces"), face_search_service=search),
    )
    container.cleanup()
    try:
        assert handler({"s3Bucket": "uploads", "s3Key": "photo.jpg"}) == "No matching faces found."
        assert container.initialized
        assert search.queries[0].collection_id == "faces"
    finally:
        container.cleanup()


def test_remaining_time_never_negative():
    assert remaining_time(FakeLambdaContext(remaining_ms=100), 500) == 0.0


class ContextRecordingSearch(FaceSearchService):
    """Face search recording the logging context it runs under."""

    def __init__(self):
        self.seen = []

    async def search_faces(self, query, timeout=None):
        self.seen.append(structlog.contextvars.get_contextvars())
        return []


def test_logging_context_is_bound_per_invocation(install):
    search = install(ContextRecordingSearch())

    handler({"s3Bucket": "uploads", "s3Key": "photo+of+jane.jpg"}, FakeLambdaContext())

    assert search.seen == [
        {"request_id": FakeLambdaContext.aws_request_id, "image": "s3://uploads/photo of jane.jpg"}
    ]
    assert structlog.contextvars.get_contextvars() == {}


def test_logging_context_is_cleared_after_failure(install, make_search, remote_error):
    install(make_search(error=remote_error))

    with pytest.raises(RemoteCallError):
        handler({"s3Bucket": "uploads", "s3Key": "photo.jpg"}, FakeLambdaContext())

    assert structlog.contextvars.get_contextvars() == {}
