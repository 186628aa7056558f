from .face_search import FaceSearchService

__all__ = ["FaceSearchService"]
