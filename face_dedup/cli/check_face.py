"""CLI tool to check an image in S3 for an already enrolled face."""
import argparse
import asyncio
import sys
from typing import Optional

from face_dedup.core.config import settings
from face_dedup.core.exceptions import FaceAlreadyExistsError, FaceSearchFailure
from face_dedup.core.logging import get_logger, setup_logging
from face_dedup.services.aws.rekognition import RekognitionFaceSearchService
from face_dedup.services.duplicate_detection import DuplicateFaceDetectionService

logger = get_logger(__name__)

EXIT_NO_MATCH = 0
EXIT_FAILURE = 1
EXIT_DUPLICATE = 2


async def check_face(bucket: str, key: str, collection_id: Optional[str] = None) -> int:
    """
    Run the duplicate face check for a single S3 object.

    Args:
        bucket: S3 bucket holding the image
        key: Raw S3 key, decoded the same way as in an upload event
        collection_id: Collection to search instead of the configured one

    Returns:
        Process exit code
    """
    config = settings
    if collection_id:
        config = settings.model_copy(update={"REKOGNITION_COLLECTION_ID": collection_id})

    service = DuplicateFaceDetectionService(
        face_search_service=RekognitionFaceSearchService(),
        config=config,
    )
    try:
        message = await service.check_image({"s3Bucket": bucket, "s3Key": key})
    except FaceAlreadyExistsError as e:
        print(e.message)
        return EXIT_DUPLICATE
    except FaceSearchFailure as e:
        logger.error("Duplicate face check failed", kind=e.kind.value, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print(message)
    return EXIT_NO_MATCH


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Check whether the face in an S3 image is already in a Rekognition collection"
    )
    parser.add_argument("bucket", help="S3 bucket holding the image")
    parser.add_argument("key", help="S3 object key of the image")
    parser.add_argument(
        "--collection-id",
        help="Rekognition collection to search (defaults to REKOGNITION_COLLECTION_ID)"
    )
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(check_face(args.bucket, args.key, args.collection_id)))


if __name__ == "__main__":
    main()
