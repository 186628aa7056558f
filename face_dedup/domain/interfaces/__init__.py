"""Service interfaces package."""
from .recognition import FaceSearchService

__all__ = ["FaceSearchService"]
