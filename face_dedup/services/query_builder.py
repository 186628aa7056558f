"""Construction of face search queries."""
from pydantic import ValidationError

from face_dedup.core.config import Settings
from face_dedup.core.exceptions import ConfigurationError
from face_dedup.domain.entities.image import ImageReference
from face_dedup.domain.value_objects.recognition import RecognitionQuery

# Search policy, never taken from the event
MATCH_THRESHOLD = 70.0
MAX_CANDIDATES = 3


def build_query(image: ImageReference, config: Settings) -> RecognitionQuery:
    """
    Build the search query for an uploaded image.

    Args:
        image: Decoded reference to the uploaded image
        config: Settings providing the collection id

    Returns:
        RecognitionQuery against the configured collection

    Raises:
        ConfigurationError: If no collection id is configured
    """
    collection_id = (config.REKOGNITION_COLLECTION_ID or "").strip()
    if not collection_id:
        raise ConfigurationError(
            "REKOGNITION_COLLECTION_ID is not configured",
            details={"setting": "REKOGNITION_COLLECTION_ID"},
        )

    try:
        return RecognitionQuery(
            collection_id=collection_id,
            image=image,
            match_threshold=MATCH_THRESHOLD,
            max_candidates=MAX_CANDIDATES,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid face search query: {e}") from e
