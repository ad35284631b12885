"""boto3 access to the gallery bucket."""

from collections.abc import Iterator, Mapping
from typing import Any, Protocol

import boto3

from core.config import get_settings
from core.utils.constants import ENV_IMAGE_S3_BUCKET_NAME


class S3AdapterProtocol(Protocol):
    """Bucket operations the blob store relies on."""

    def write_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: Mapping[str, str],
    ) -> None: ...

    def open_object(self, *, key: str) -> Any: ...

    def stat_object(self, *, key: str) -> Mapping[str, Any]: ...

    def remove_object(self, *, key: str) -> None: ...

    def iter_objects(self, *, prefix: str) -> Iterator[Mapping[str, Any]]: ...


class S3Adapter:
    """The configured gallery bucket bound to one boto3 S3 client.

    Every call goes straight to S3. botocore errors propagate unchanged;
    `S3BlobStore` translates them.
    """

    def __init__(self, client: Any | None = None) -> None:
        settings = get_settings()
        if not settings.bucket_name:
            raise RuntimeError(f"{ENV_IMAGE_S3_BUCKET_NAME} environment variable is not set")

        self.bucket = settings.bucket_name
        self._client = client or boto3.client(
            "s3",
            endpoint_url=settings.endpoint_url,
            region_name=settings.region,
        )

    def write_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: Mapping[str, str],
    ) -> None:
        # no ACL: objects stay private to the bucket
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata=dict(metadata),
        )

    def open_object(self, *, key: str) -> Any:
        """Return the unread `StreamingBody` of an object."""
        return self._client.get_object(Bucket=self.bucket, Key=key)["Body"]

    def stat_object(self, *, key: str) -> Mapping[str, Any]:
        """HEAD an object: size, content type, timestamps and user metadata."""
        return self._client.head_object(Bucket=self.bucket, Key=key)

    def remove_object(self, *, key: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=key)

    def iter_objects(self, *, prefix: str) -> Iterator[Mapping[str, Any]]:
        """Yield object summaries under `prefix` across every listing page."""
        pages = self._client.get_paginator("list_objects_v2").paginate(
            Bucket=self.bucket,
            Prefix=prefix,
        )
        for page in pages:
            yield from page.get("Contents", [])
