"""
Rekognition face search service using aioboto3.
"""
import asyncio
from typing import Any, Dict, List, Optional

import aioboto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from face_dedup.core.config import settings
from face_dedup.core.exceptions import RemoteCallError
from face_dedup.core.logging import get_logger
from face_dedup.domain.interfaces.recognition.face_search import FaceSearchService
from face_dedup.domain.value_objects.recognition import CandidateMatch, RecognitionQuery

logger = get_logger(__name__)

# A failed search is reported straight back to the invoker
_CLIENT_CONFIG = Config(retries={"total_max_attempts": 1})


class RekognitionFaceSearchService(FaceSearchService):
    """Searches a Rekognition face collection with SearchFacesByImage."""

    def __init__(
        self,
        region_name: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        session: Optional[aioboto3.Session] = None,
    ):
        """Store configuration but do not create a client yet."""
        self.region_name = region_name or settings.AWS_REGION
        self.access_key_id = access_key_id or settings.AWS_ACCESS_KEY_ID
        self.secret_access_key = secret_access_key or settings.AWS_SECRET_ACCESS_KEY
        # The session only carries configuration, clients are opened per call
        self._session = session or aioboto3.Session()

    def _client_args(self) -> Dict[str, Any]:
        client_args: Dict[str, Any] = {
            "region_name": self.region_name or "us-east-1",
            "config": _CLIENT_CONFIG,
        }
        if self.access_key_id and self.secret_access_key:
            logger.debug("Using explicit AWS credentials from config for aioboto3")
            client_args["aws_access_key_id"] = self.access_key_id
            client_args["aws_secret_access_key"] = self.secret_access_key
        else:
            logger.debug("Allowing aioboto3 to discover AWS credentials automatically")
        return client_args

    async def _search(self, request: Dict[str, Any]) -> Dict[str, Any]:
        async with self._session.client("rekognition", **self._client_args()) as rekognition:
            return await rekognition.search_faces_by_image(**request)

    async def search_faces(
        self,
        query: RecognitionQuery,
        timeout: Optional[float] = None,
    ) -> List[CandidateMatch]:
        """
        Search the collection for faces matching the image in S3.

        Args:
            query: Face search query
            timeout: Seconds left before the invocation deadline (None for no deadline)

        Returns:
            Candidate matches returned by Rekognition

        Raises:
            RemoteCallError: If the search fails or the deadline elapses
        """
        context = {"collection_id": query.collection_id, "image": query.image.uri}

        try:
            response = await asyncio.wait_for(self._search(query.to_request()), timeout=timeout)
        except asyncio.TimeoutError as e:
            if timeout is None:
                # Raised by the transport itself, no deadline was applied
                logger.error("Face search timed out", error=str(e), exc_info=True, **context)
                raise RemoteCallError(
                    f"Face search in collection '{query.collection_id}' for {query.image.uri} "
                    f"timed out: {str(e) or 'no response'}",
                    details={**context, "cancelled": False},
                ) from e
            logger.error("Face search abandoned at invocation deadline", timeout=timeout, **context)
            raise RemoteCallError(
                f"Face search in collection '{query.collection_id}' for {query.image.uri} "
                f"did not complete within {timeout:.3f}s",
                details={**context, "cancelled": True, "timeout": timeout},
            ) from e
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            logger.error(
                "Failed to search faces due to client error",
                error_code=error_code,
                error=str(e),
                exc_info=True,
                **context,
            )
            raise RemoteCallError(
                f"Failed to search faces by image in collection '{query.collection_id}' "
                f"for {query.image.uri}: {e}",
                details={**context, "error_code": error_code},
            ) from e
        except BotoCoreError as e:
            logger.error("Failed to reach Rekognition", error=str(e), exc_info=True, **context)
            raise RemoteCallError(
                f"Failed to search faces by image in collection '{query.collection_id}' "
                f"for {query.image.uri}: {e}",
                details=context,
            ) from e
        except Exception as e:
            logger.error("Unexpected error searching faces", error=str(e), exc_info=True, **context)
            raise RemoteCallError(
                f"Unexpected error searching faces in collection '{query.collection_id}' "
                f"for {query.image.uri}: {e}",
                details=context,
            ) from e

        candidates = [
            CandidateMatch.from_face_match(face_match)
            for face_match in response.get("FaceMatches") or []
        ]
        logger.info("Search results", matches_count=len(candidates), **context)
        return candidates
