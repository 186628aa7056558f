"""Face search service interface."""
from abc import ABC, abstractmethod
from typing import List, Optional

from ...value_objects.recognition import CandidateMatch, RecognitionQuery


class FaceSearchService(ABC):
    """Interface for searching a face collection by image."""

    @abstractmethod
    async def search_faces(
        self,
        query: RecognitionQuery,
        timeout: Optional[float] = None,
    ) -> List[CandidateMatch]:
        """
        Search the query's collection for faces matching the query's image.

        Args:
            query: Collection, image, threshold and result limit to search with
            timeout: Seconds left before the invocation deadline (None for no deadline)

        Returns:
            Candidate matches at or above the query threshold, possibly empty.
            Their order carries no meaning.

        Raises:
            RemoteCallError: If the call fails or the deadline elapses
        """
        pass
