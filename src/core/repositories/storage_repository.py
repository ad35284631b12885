"""Abstract contract for blob storage."""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from core.models.image import BlobEntry


class BlobStoreRepository(ABC):
    """Contract for storing and retrieving image objects by key.

    Implementations could be S3, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def put_blob(
        self,
        *,
        key: str,
        data: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> None:
        """Store bytes under a key.

        Raises:
            StorageWriteFailedError: If the write fails
        """

    @abstractmethod
    def iter_content(self, *, key: str, chunk_size: int) -> Iterator[bytes]:
        """Yield the object body in chunks without loading it whole.

        Raises:
            NotFoundError: If the object doesn't exist
            StorageReadFailedError: If opening or reading the stream fails
        """

    @abstractmethod
    def exists(self, *, key: str) -> bool:
        """Return whether an object exists under the key.

        Raises:
            StorageReadFailedError: If the existence check itself fails
        """

    @abstractmethod
    def get_metadata(self, *, key: str) -> BlobEntry:
        """Return metadata for a single object.

        Raises:
            NotFoundError: If the object doesn't exist
            StorageReadFailedError: If the lookup fails
        """

    @abstractmethod
    def list_keys(self, *, prefix: str) -> list[str]:
        """Return every key under a prefix.

        Raises:
            StorageReadFailedError: If the listing fails
        """

    @abstractmethod
    def remove_blob(self, *, key: str) -> None:
        """Delete the object under a key.

        Raises:
            DeleteFailedError: If deletion fails
        """
