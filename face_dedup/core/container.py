"""Service container for dependency injection."""
from typing import Optional

from face_dedup.core.config import Settings, settings as default_settings
from face_dedup.domain.interfaces.recognition.face_search import FaceSearchService
from face_dedup.services.aws.rekognition import RekognitionFaceSearchService
from face_dedup.services.duplicate_detection import DuplicateFaceDetectionService


class ServiceContainer:
    """Container for the function's services.

    Services are built once per process, on the first invocation, and reused
    by later invocations. None of them holds per-invocation state.

    Example:
        ```python
        container = ServiceContainer()
        container.initialize()

        detection = container.duplicate_detection_service
        ```
    """

    def __init__(self) -> None:
        """Initialize empty container."""
        self.settings: Optional[Settings] = None
        self.face_search_service: Optional[FaceSearchService] = None
        self.duplicate_detection_service: Optional[DuplicateFaceDetectionService] = None

    @property
    def initialized(self) -> bool:
        return self.duplicate_detection_service is not None

    def initialize(
        self,
        settings: Optional[Settings] = None,
        face_search_service: Optional[FaceSearchService] = None,
    ) -> None:
        """Initialize all services in the correct order."""
        self.settings = settings or default_settings
        self.face_search_service = face_search_service or RekognitionFaceSearchService(
            region_name=self.settings.AWS_REGION,
            access_key_id=self.settings.AWS_ACCESS_KEY_ID,
            secret_access_key=self.settings.AWS_SECRET_ACCESS_KEY,
        )
        self.duplicate_detection_service = DuplicateFaceDetectionService(
            face_search_service=self.face_search_service,
            config=self.settings,
        )

    def cleanup(self) -> None:
        """Drop service references in reverse order of initialization."""
        self.duplicate_detection_service = None
        self.face_search_service = None
        self.settings = None


# Global container instance
container = ServiceContainer()
