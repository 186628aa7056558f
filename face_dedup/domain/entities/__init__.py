"""Domain entities package."""
from .image import ImageReference, ImageUploadEvent

__all__ = ["ImageReference", "ImageUploadEvent"]
