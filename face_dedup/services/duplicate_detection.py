"""Duplicate face detection for uploaded images."""
from typing import Any, Mapping, Optional, Union

from face_dedup.core.config import Settings
from face_dedup.core.exceptions import FaceAlreadyExistsError
from face_dedup.core.logging import bind_context, get_logger
from face_dedup.domain.entities.image import ImageUploadEvent
from face_dedup.domain.interfaces.recognition.face_search import FaceSearchService
from face_dedup.domain.value_objects.recognition import SearchOutcome
from face_dedup.services.event_decoder import decode_event
from face_dedup.services.outcome import resolve_outcome
from face_dedup.services.query_builder import build_query

logger = get_logger(__name__)


class DuplicateFaceDetectionService:
    """Service checking whether the face in an uploaded image is already enrolled.

    This service:
    1. Decodes the S3 reference carried by the event
    2. Builds a search query against the configured collection
    3. Searches the collection through the face search service
    4. Resolves the returned candidates into an outcome

    Example:
        ```python
        service = DuplicateFaceDetectionService(RekognitionFaceSearchService(), settings)
        message = await service.check_image({"s3Bucket": "uploads", "s3Key": "photo+of+jane.jpg"})
        ```
    """

    def __init__(self, face_search_service: FaceSearchService, config: Settings) -> None:
        """Initialize the duplicate face detection service.

        Args:
            face_search_service: Service searching the face collection
            config: Settings providing the collection id
        """
        self.face_search_service = face_search_service
        self.config = config

    async def resolve(
        self,
        event: Union[ImageUploadEvent, Mapping[str, Any]],
        timeout: Optional[float] = None,
    ) -> SearchOutcome:
        """Run the check and return the outcome without raising on duplicates.

        Raises:
            EventDecodeError: If the event cannot be decoded
            ConfigurationError: If no collection is configured
            RemoteCallError: If the face search fails
        """
        image = decode_event(event)
        bind_context(image=image.uri)
        query = build_query(image, self.config)
        logger.info(
            "Searching collection for face",
            collection_id=query.collection_id,
            threshold=query.match_threshold,
            max_faces=query.max_candidates,
        )

        candidates = await self.face_search_service.search_faces(query, timeout=timeout)
        outcome = resolve_outcome(candidates)
        logger.info(
            "Resolved face search outcome",
            outcome=outcome.kind.value,
            matches_count=outcome.candidate_count,
        )
        return outcome

    async def check_image(
        self,
        event: Union[ImageUploadEvent, Mapping[str, Any]],
        timeout: Optional[float] = None,
    ) -> str:
        """Check an uploaded image for an already enrolled face.

        Args:
            event: Event referencing the uploaded image
            timeout: Seconds left for the face search (None for no deadline)

        Returns:
            "No matching faces found." when the face is new

        Raises:
            FaceAlreadyExistsError: If the face is already in the collection
            EventDecodeError: If the event cannot be decoded
            ConfigurationError: If no collection is configured
            RemoteCallError: If the face search fails
        """
        outcome = await self.resolve(event, timeout=timeout)
        if outcome.is_duplicate:
            raise FaceAlreadyExistsError(details={"matches_count": outcome.candidate_count})
        return outcome.message
