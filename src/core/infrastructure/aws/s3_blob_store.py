"""S3-backed implementation of BlobStoreRepository."""

from collections.abc import Iterator, Mapping
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    DeleteFailedError,
    NotFoundError,
    StorageReadFailedError,
    StorageWriteFailedError,
)
from core.models.image import BlobEntry
from core.repositories.storage_repository import BlobStoreRepository

logger = Logger(UTC=True)

_MISSING_OBJECT_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _is_missing(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in _MISSING_OBJECT_CODES


class S3BlobStore(BlobStoreRepository):
    """Blob store implementation backed by Amazon S3.

    Objects are written private; reads go through this class only.
    """

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3 = adapter or S3Adapter()

    def put_blob(
        self,
        *,
        key: str,
        data: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> None:
        """Upload bytes to S3 under the given key."""
        logger.debug(
            "Uploading object",
            extra={"key": key, "size": len(data), "content_type": content_type},
        )

        try:
            self._s3.write_object(
                key=key,
                body=data,
                content_type=content_type,
                metadata=metadata or {},
            )
        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise StorageWriteFailedError(
                message="Upload failed",
                details={"key": key, "cause": str(exc)},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading object")
            raise StorageWriteFailedError(
                message="Upload failed",
                details={"key": key, "cause": str(exc)},
            ) from exc

        logger.info("Object uploaded successfully", extra={"key": key})

    def iter_content(self, *, key: str, chunk_size: int) -> Iterator[bytes]:
        """Stream the object body from S3 chunk by chunk."""
        logger.debug("Opening object stream", extra={"key": key})

        try:
            body = self._s3.open_object(key=key)
        except ClientError as exc:
            if _is_missing(exc):
                raise NotFoundError(
                    message="Image not found",
                    details={"key": key},
                ) from exc

            logger.error("S3 read failed", extra={"key": key})
            raise StorageReadFailedError(
                message="Failed to read image",
                details={"key": key, "cause": str(exc)},
            ) from exc

        try:
            yield from body.iter_chunks(chunk_size=chunk_size)
        except Exception as exc:
            logger.exception("Object stream interrupted", extra={"key": key})
            raise StorageReadFailedError(
                message="Failed to read image",
                details={"key": key, "cause": str(exc)},
            ) from exc
        finally:
            body.close()

    def exists(self, *, key: str) -> bool:
        """Return True when S3 reports the object, False on a 404."""
        try:
            self._s3.stat_object(key=key)
        except ClientError as exc:
            if _is_missing(exc):
                return False

            logger.error("S3 existence check failed", extra={"key": key})
            raise StorageReadFailedError(
                message="Failed to check image",
                details={"key": key, "cause": str(exc)},
            ) from exc

        return True

    def get_metadata(self, *, key: str) -> BlobEntry:
        """Fetch content type, size and timestamps for one object."""
        try:
            response = self._s3.stat_object(key=key)
        except ClientError as exc:
            if _is_missing(exc):
                raise NotFoundError(
                    message="Image not found",
                    details={"key": key},
                ) from exc

            logger.error("S3 metadata lookup failed", extra={"key": key})
            raise StorageReadFailedError(
                message="Failed to fetch image metadata",
                details={"key": key, "cause": str(exc)},
            ) from exc

        return self._to_entry(key, response)

    def list_keys(self, *, prefix: str) -> list[str]:
        """List every key under a prefix."""
        logger.debug("Listing objects", extra={"prefix": prefix})

        try:
            keys = [summary["Key"] for summary in self._s3.iter_objects(prefix=prefix)]
        except Exception as exc:
            logger.exception("S3 listing failed", extra={"prefix": prefix})
            raise StorageReadFailedError(
                message="Failed to fetch images",
                details={"prefix": prefix, "cause": str(exc)},
            ) from exc

        logger.debug("Objects listed", extra={"prefix": prefix, "count": len(keys)})
        return keys

    def remove_blob(self, *, key: str) -> None:
        """Delete an object from S3."""
        logger.debug("Deleting object", extra={"key": key})

        try:
            self._s3.remove_object(key=key)
        except Exception as exc:
            logger.exception("S3 deletion failed", extra={"key": key})
            raise DeleteFailedError(
                message="Failed to delete image",
                details={"key": key, "cause": str(exc)},
            ) from exc

        logger.info("Object deleted successfully", extra={"key": key})

    @staticmethod
    def _to_entry(key: str, response: Mapping[str, Any]) -> BlobEntry:
        return BlobEntry(
            key=key,
            size=int(response.get("ContentLength", 0)),
            content_type=response.get("ContentType") or None,
            last_modified=response["LastModified"],
            metadata=dict(response.get("Metadata") or {}),
        )
