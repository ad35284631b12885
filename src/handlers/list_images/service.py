"""
Business logic for the gallery listing.
"""

from urllib.parse import unquote

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_blob_store import S3BlobStore
from core.models.errors import ImageServiceError
from core.models.image import BlobEntry, ImageRecord
from core.repositories.storage_repository import BlobStoreRepository
from core.utils.constants import ORIGINAL_NAME_METADATA_KEY, UPLOAD_PREFIX
from core.utils.keys import display_name, image_url, is_image_key

logger = Logger(UTC=True)


class ListService:
    """Application service responsible for listing gallery images.

    This service coordinates:
    - Listing every key under the upload prefix
    - Keeping only image extensions
    - Fetching metadata per key, dropping entries that fail
    - Sorting newest-first

    The listing is rebuilt from the store on every call.
    """

    def __init__(self, storage: BlobStoreRepository | None = None) -> None:
        """Initialize list service with required dependencies."""
        self.storage = storage or S3BlobStore()

    def list_images(self) -> list[ImageRecord]:
        """Return image records ordered by upload time, newest first.

        Raises:
            StorageReadFailedError: If the store listing itself fails
        """
        keys = [key for key in self.storage.list_keys(prefix=UPLOAD_PREFIX) if is_image_key(key)]

        records: list[ImageRecord] = []
        for key in keys:
            try:
                entry = self.storage.get_metadata(key=key)
            except ImageServiceError as exc:
                logger.warning(
                    "Skipping image with unreadable metadata",
                    extra={"key": key, "error_code": exc.error_code},
                )
                continue

            records.append(self.to_record(entry))

        records = self.sort_records(records)

        logger.info("Images listed successfully", extra={"count": len(records)})
        return records

    @staticmethod
    def to_record(entry: BlobEntry) -> ImageRecord:
        original_name = entry.metadata.get(ORIGINAL_NAME_METADATA_KEY)

        return ImageRecord(
            key=entry.key,
            display_name=display_name(entry.key),
            original_name=unquote(original_name) if original_name else None,
            url=image_url(entry.key),
            upload_time=entry.last_modified,
            size=entry.size,
            content_type=entry.content_type,
        )

    @staticmethod
    def sort_records(records: list[ImageRecord]) -> list[ImageRecord]:
        """Sort by upload time descending; equal times fall back to key descending."""
        return sorted(
            records,
            key=lambda record: (record.upload_time, record.key),
            reverse=True,
        )
