"""Decoding of inbound upload events into image references."""
import re
from typing import Any, Mapping, Union
from urllib.parse import unquote_plus

from pydantic import ValidationError

from face_dedup.core.exceptions import EventDecodeError
from face_dedup.core.logging import get_logger
from face_dedup.domain.entities.image import ImageReference, ImageUploadEvent

logger = get_logger(__name__)

# A "%" that does not start a two digit hex escape
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_key(raw_key: str) -> str:
    """Turn a raw S3 key from an event into the literal object key.

    "+" is read as a space before percent-decoding, the same way S3 event
    notifications encode keys. A literal "+" therefore has to arrive as "%2B".

    Raises:
        EventDecodeError: If the key contains a malformed escape or the
            escaped bytes are not valid UTF-8
    """
    malformed = _MALFORMED_ESCAPE.search(raw_key)
    if malformed:
        escape = raw_key[malformed.start():malformed.start() + 3]
        raise EventDecodeError(
            f"Failed to decode S3 key '{raw_key}': invalid escape sequence '{escape}'",
            details={"raw_key": raw_key, "position": malformed.start()},
        )
    try:
        return unquote_plus(raw_key, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise EventDecodeError(
            f"Failed to decode S3 key '{raw_key}': {e}",
            details={"raw_key": raw_key},
        ) from e


def _parse_event(event: Union[ImageUploadEvent, Mapping[str, Any]]) -> ImageUploadEvent:
    if isinstance(event, ImageUploadEvent):
        return event
    if not isinstance(event, Mapping):
        raise EventDecodeError(
            f"Event must be a JSON object, got {type(event).__name__}"
        )

    if "Records" in event:
        # S3 event notification
        try:
            s3 = event["Records"][0]["s3"]
            event = {"s3Bucket": s3["bucket"]["name"], "s3Key": s3["object"]["key"]}
        except (IndexError, KeyError, TypeError) as e:
            raise EventDecodeError(
                f"Malformed S3 event notification: {e!r}",
                details={"missing": str(e)},
            ) from e

    try:
        return ImageUploadEvent.model_validate(event)
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise EventDecodeError(
            f"Invalid event, check fields {', '.join(fields)}: {e}",
            details={"fields": fields},
        ) from e


def decode_event(event: Union[ImageUploadEvent, Mapping[str, Any]]) -> ImageReference:
    """
    Decode an inbound event into a reference to the uploaded image.

    Accepts the function's own ``{"s3Bucket": ..., "s3Key": ...}`` shape as well
    as an S3 event notification, of which only the first record is used.

    Args:
        event: Raw event as delivered by the runtime

    Returns:
        ImageReference with the literal, decoded object key

    Raises:
        EventDecodeError: If a field is missing or empty, or the key cannot be decoded
    """
    upload = _parse_event(event)

    if not upload.s3_bucket:
        raise EventDecodeError("Event is missing the S3 bucket", details={"field": "s3Bucket"})
    if not upload.s3_key:
        raise EventDecodeError("Event is missing the S3 key", details={"field": "s3Key"})

    key = decode_key(upload.s3_key)
    if not key:
        raise EventDecodeError(
            f"S3 key '{upload.s3_key}' decodes to an empty key",
            details={"raw_key": upload.s3_key},
        )

    logger.debug("Decoded S3 key", raw_key=upload.s3_key, key=key, bucket=upload.s3_bucket)
    return ImageReference(container=upload.s3_bucket, key=key)
