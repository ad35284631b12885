"""
Business logic for proxy-serving stored images.

This is the only read path for object bytes: the bucket stays private and
every fetch passes through here.
"""

from collections.abc import Iterator

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_blob_store import S3BlobStore
from core.models.errors import NotFoundError
from core.models.image import BlobEntry
from core.repositories.storage_repository import BlobStoreRepository
from core.utils.constants import (
    DEFAULT_IMAGE_CONTENT_TYPE,
    IMAGE_CACHE_CONTROL,
    STREAM_CHUNK_SIZE,
)
from core.utils.keys import is_managed_key

logger = Logger(UTC=True)


class GetService:
    """Application service responsible for streaming images.

    This service orchestrates:
    - Rejecting keys outside the upload prefix
    - Checking existence in the store
    - Resolving content type and cache headers
    - Opening a chunked body stream
    """

    def __init__(self, storage: BlobStoreRepository | None = None) -> None:
        self.storage = storage or S3BlobStore()

    def open_image(self, key: str) -> tuple[BlobEntry, Iterator[bytes]]:
        """Look up an image and return its metadata with a lazy chunk stream.

        Raises:
            NotFoundError: If the key is not a stored upload
            StorageReadFailedError: If the store cannot be queried
        """
        logger.debug("Opening image for proxy-serve", extra={"key": key})

        if not is_managed_key(key) or not self.storage.exists(key=key):
            logger.warning("Image not found", extra={"key": key})
            raise NotFoundError(
                message="Image not found",
                details={"key": key},
            )

        entry = self.storage.get_metadata(key=key)
        chunks = self.storage.iter_content(key=key, chunk_size=STREAM_CHUNK_SIZE)
        return entry, chunks

    @staticmethod
    def response_headers(entry: BlobEntry) -> dict[str, str]:
        return {
            "Content-Type": entry.content_type or DEFAULT_IMAGE_CONTENT_TYPE,
            "Cache-Control": IMAGE_CACHE_CONTROL,
        }
