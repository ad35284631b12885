"""Business logic for image deletion.

Deleting a missing object is reported as a failure: S3 itself answers such
deletes with success, so existence is checked first.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_blob_store import S3BlobStore
from core.models.errors import DeleteFailedError, StorageReadFailedError
from core.repositories.storage_repository import BlobStoreRepository
from core.utils.keys import is_managed_key

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting images."""

    def __init__(self, storage: BlobStoreRepository | None = None) -> None:
        """Initialize the delete service with its storage dependency."""
        self.storage = storage or S3BlobStore()

    def delete_image(self, key: str) -> str:
        """Delete a stored upload.

        The deletion flow is:
        1. Confirm the key is a stored upload
        2. Delete the object from storage

        Args:
            key: Full object key

        Returns:
            The deleted key

        Raises:
            DeleteFailedError: If the object is absent or the delete fails
        """
        logger.debug("Starting image deletion", extra={"key": key})

        try:
            present = is_managed_key(key) and self.storage.exists(key=key)
        except StorageReadFailedError as exc:
            raise DeleteFailedError(
                message="Failed to delete image",
                details={"key": key, "cause": exc.message},
            ) from exc

        if not present:
            logger.warning("Image to delete not found", extra={"key": key})
            raise DeleteFailedError(
                message="Failed to delete image",
                details={"key": key, "cause": "not found"},
            )

        self.storage.remove_blob(key=key)

        logger.info("Image deleted successfully", extra={"key": key})
        return key
