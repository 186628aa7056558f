"""Face search value objects."""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from face_dedup.core.exceptions import DUPLICATE_FACE_MESSAGE
from face_dedup.domain.entities.image import ImageReference

NO_MATCH_MESSAGE = "No matching faces found."


class RecognitionQuery(BaseModel):
    """Search request for faces matching a stored image."""
    collection_id: str = Field(..., min_length=1, description="Face collection to search in")
    image: ImageReference = Field(..., description="Image containing the face to search for")
    match_threshold: float = Field(..., ge=0.0, le=100.0, description="Minimum match confidence (0-100)")
    max_candidates: int = Field(..., gt=0, description="Maximum number of matches to return")

    model_config = ConfigDict(frozen=True)

    def to_request(self) -> Dict[str, Any]:
        """Render the query as SearchFacesByImage request parameters."""
        return {
            "CollectionId": self.collection_id,
            "Image": {
                "S3Object": {
                    "Bucket": self.image.container,
                    "Name": self.image.key,
                }
            },
            "FaceMatchThreshold": self.match_threshold,
            "MaxFaces": self.max_candidates,
        }


class CandidateMatch(BaseModel):
    """Face in the collection returned as similar to the searched face."""
    face_id: Optional[str] = Field(None, description="Identifier of the matched face")
    similarity: Optional[float] = Field(None, description="Similarity score (0-100)")
    external_image_id: Optional[str] = Field(None, description="External id assigned at enrollment")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_face_match(cls, face_match: Dict[str, Any]) -> "CandidateMatch":
        """Create a candidate from a Rekognition FaceMatch record."""
        face = face_match.get("Face") or {}
        return cls(
            face_id=face.get("FaceId"),
            similarity=face_match.get("Similarity"),
            external_image_id=face.get("ExternalImageId"),
        )


class OutcomeKind(str, Enum):
    """Terminal outcome of a duplicate face check."""
    NO_MATCH = "no_match"
    DUPLICATE_DETECTED = "duplicate_detected"


class SearchOutcome(BaseModel):
    """Result of resolving the candidates of a face search."""
    kind: OutcomeKind = Field(..., description="Outcome of the check")
    candidate_count: int = Field(..., ge=0, description="Number of candidates returned")

    model_config = ConfigDict(frozen=True)

    @property
    def is_duplicate(self) -> bool:
        return self.kind is OutcomeKind.DUPLICATE_DETECTED

    @property
    def message(self) -> str:
        if self.is_duplicate:
            return DUPLICATE_FACE_MESSAGE
        return NO_MATCH_MESSAGE
