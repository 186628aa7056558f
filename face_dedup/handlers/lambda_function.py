"""AWS Lambda entry point for the duplicate face check.

Deploy with ``face_dedup.handlers.lambda_function.handler`` as the handler.
Exceptions are left to the Lambda runtime, which reports the exception class
as ``errorType``; a duplicate therefore shows up as ``FaceAlreadyExistsError``.
"""
import asyncio
from typing import Any, Mapping, Optional

from face_dedup.core.container import container
from face_dedup.core.exceptions import FaceAlreadyExistsError, FaceSearchFailure
from face_dedup.core.logging import get_logger, invocation_context, setup_logging

setup_logging()
logger = get_logger(__name__)


def remaining_time(context: Any, margin_ms: int) -> Optional[float]:
    """Seconds the face search may take before the invocation deadline.

    Returns None when the runtime context does not expose a deadline.
    """
    get_remaining = getattr(context, "get_remaining_time_in_millis", None)
    if get_remaining is None:
        return None
    return max(get_remaining() - margin_ms, 0) / 1000.0


def handler(event: Mapping[str, Any], context: Any = None) -> str:
    """
    Check the image referenced by the event for an already enrolled face.

    Args:
        event: ``{"s3Bucket": ..., "s3Key": ...}`` or an S3 event notification
        context: Lambda context object

    Returns:
        "No matching faces found." if the face is not in the collection

    Raises:
        FaceAlreadyExistsError: If the face is already in the collection
        EventDecodeError: If the event cannot be decoded
        ConfigurationError: If no collection is configured
        RemoteCallError: If the face search fails
    """
    with invocation_context(request_id=getattr(context, "aws_request_id", None)):
        logger.info("Reading input from event", event=event)

        if not container.initialized:
            container.initialize()

        timeout = remaining_time(context, container.settings.REMOTE_CALL_DEADLINE_MARGIN_MS)
        service = container.duplicate_detection_service
        try:
            message = asyncio.run(service.check_image(event, timeout=timeout))
        except FaceAlreadyExistsError as e:
            logger.info("Face already in collection", **e.details)
            raise
        except FaceSearchFailure as e:
            logger.error("Duplicate face check failed", kind=e.kind.value, error=str(e), **e.details)
            raise

        logger.info(message)
        return message
