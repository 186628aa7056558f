"""Duplicate face check services."""
from .duplicate_detection import DuplicateFaceDetectionService
from .event_decoder import decode_event, decode_key
from .outcome import resolve_outcome
from .query_builder import MATCH_THRESHOLD, MAX_CANDIDATES, build_query

__all__ = [
    "DuplicateFaceDetectionService",
    "MATCH_THRESHOLD",
    "MAX_CANDIDATES",
    "build_query",
    "decode_event",
    "decode_key",
    "resolve_outcome",
]
