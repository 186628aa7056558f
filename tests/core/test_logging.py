"""Tests for the invocation logging context."""
import pytest
import structlog

from face_dedup.core.logging import bind_context, invocation_context


def test_invocation_context_replaces_stale_values():
    structlog.contextvars.bind_contextvars(request_id="previous", image="s3://old/a.jpg")

    with invocation_context(request_id="current"):
        assert structlog.contextvars.get_contextvars() == {"request_id": "current"}

    assert structlog.contextvars.get_contextvars() == {}


def test_bound_values_are_cleared_on_error():
    with pytest.raises(RuntimeError):
        with invocation_context(request_id="req-1"):
            bind_context(image="s3://uploads/a.jpg")
            assert structlog.contextvars.get_contextvars()["image"] == "s3://uploads/a.jpg"
            raise RuntimeError("boom")

    assert structlog.contextvars.get_contextvars() == {}
