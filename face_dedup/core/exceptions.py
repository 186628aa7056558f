"""Custom exceptions for the duplicate face check."""
from enum import Enum
from typing import Optional


DUPLICATE_FACE_MESSAGE = "Face in the picture is already in the system."


class ErrorKind(str, Enum):
    """Discriminant shared by every error raised from the pipeline."""
    DECODE = "decode"
    CONFIGURATION = "configuration"
    REMOTE_CALL = "remote_call"
    DUPLICATE_DETECTED = "duplicate_detected"


class FaceDedupError(Exception):
    """Base exception for duplicate face check operations."""

    kind: ErrorKind

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize duplicate face check error.

        Args:
            message: Error description
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FaceSearchFailure(FaceDedupError):
    """Base exception for genuine failures, as opposed to a detected duplicate."""
    pass


class EventDecodeError(FaceSearchFailure):
    """Raised when the inbound event is missing data or its key cannot be decoded."""
    kind = ErrorKind.DECODE


class ConfigurationError(FaceSearchFailure):
    """Raised when process-wide configuration is missing or invalid."""
    kind = ErrorKind.CONFIGURATION


class RemoteCallError(FaceSearchFailure):
    """Raised when the face search call fails, times out or is cancelled."""
    kind = ErrorKind.REMOTE_CALL


class FaceAlreadyExistsError(FaceDedupError):
    """Raised when the searched face matches a face already in the collection.

    This is an expected outcome rather than a system fault, so it deliberately
    does not derive from FaceSearchFailure.
    """
    kind = ErrorKind.DUPLICATE_DETECTED

    def __init__(self, details: Optional[dict] = None):
        super().__init__(DUPLICATE_FACE_MESSAGE, details)
