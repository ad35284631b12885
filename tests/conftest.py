"""
Pytest configuration and fixtures for image gallery tests.
Provides AWS mocking, S3 fixtures with proper cleanup, and multipart helpers.
"""

import base64
import os
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "image-gallery-test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-gallery")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ImageGallery")

from core.config import get_settings  # noqa: E402
from core.models.errors import (  # noqa: E402
    DeleteFailedError,
    NotFoundError,
    StorageReadFailedError,
    StorageWriteFailedError,
)
from core.models.image import BlobEntry  # noqa: E402
from core.repositories.storage_repository import BlobStoreRepository  # noqa: E402

TEST_BOUNDARY = "----gallery-test-boundary"


@pytest.fixture(autouse=True)
def reset_settings():
    """Settings are cached per process; tests that patch env need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")

    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name)

    yield s3_client

    _cleanup_s3_objects(s3_client, bucket_name)


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("uploads/1-2.png", image_bytes, "image/png")
    """

    def _put(
        key: str,
        body: bytes,
        content_type: str | None = "application/octet-stream",
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "Bucket": os.getenv("IMAGE_S3_BUCKET_NAME"),
            "Key": key,
            "Body": body,
            "Metadata": metadata or {},
        }
        if content_type:
            params["ContentType"] = content_type
        return s3_bucket.put_object(**params)

    return _put


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], bytes]:
    """
    Helper to get an object body from S3.

    Usage:
        content = s3_get_object("uploads/1-2.png")
    """

    def _get(key: str) -> bytes:
        response = s3_bucket.get_object(
            Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"),
            Key=key,
        )
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_keys(s3_bucket) -> Callable[[], list[str]]:
    """Helper returning every key currently in the bucket."""

    def _keys() -> list[str]:
        response = s3_bucket.list_objects_v2(Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"))
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _keys


def build_multipart(
    *,
    field_name: str = "image",
    filename: str | None = "cat.png",
    content_type: str | None = "image/png",
    data: bytes = b"",
    boundary: str = TEST_BOUNDARY,
) -> bytes:
    """Encode a single-part multipart/form-data body."""
    disposition = f'Content-Disposition: form-data; name="{field_name}"'
    if filename is not None:
        disposition += f'; filename="{filename}"'

    head = f"--{boundary}\r\n{disposition}\r\n"
    if content_type is not None:
        head += f"Content-Type: {content_type}\r\n"
    head += "\r\n"

    return head.encode("utf-8") + data + f"\r\n--{boundary}--\r\n".encode("utf-8")


@pytest.fixture
def multipart_event() -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway upload event around a multipart body.

    Usage:
        event = multipart_event(data=png_bytes, filename="cat.png")
    """

    def _event(**kwargs: Any) -> dict[str, Any]:
        body = build_multipart(**kwargs)
        return {
            "httpMethod": "POST",
            "path": "/upload",
            "headers": {
                "Content-Type": f"multipart/form-data; boundary={kwargs.get('boundary', TEST_BOUNDARY)}",
            },
            "body": base64.b64encode(body).decode("utf-8"),
            "isBase64Encoded": True,
        }

    return _event


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )


@pytest.fixture
def multipart_body() -> Callable[..., bytes]:
    """Expose the raw multipart encoder to parser tests."""
    return build_multipart


class InMemoryBlobStore(BlobStoreRepository):
    """Dict-backed blob store test double.

    `fail_metadata_for`, `fail_stream_after` and friends inject store failures.
    """

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str | None, dict[str, str], datetime]] = {}
        self.fail_put = False
        self.fail_list = False
        self.fail_delete = False
        self.fail_metadata_for: set[str] = set()
        self.fail_stream_after: int | None = None

    def add(
        self,
        key: str,
        data: bytes,
        *,
        content_type: str | None = "image/png",
        metadata: dict[str, str] | None = None,
        last_modified: datetime | None = None,
    ) -> None:
        self.objects[key] = (
            data,
            content_type,
            metadata or {},
            last_modified or datetime.now(timezone.utc),
        )

    def put_blob(self, *, key, data, content_type, metadata=None) -> None:
        if self.fail_put:
            raise StorageWriteFailedError(message="Upload failed", details={"key": key})
        self.add(key, data, content_type=content_type, metadata=metadata)

    def iter_content(self, *, key, chunk_size):
        if key not in self.objects:
            raise NotFoundError(message="Image not found")
        data = self.objects[key][0]
        for index, start in enumerate(range(0, len(data), chunk_size)):
            if self.fail_stream_after is not None and index >= self.fail_stream_after:
                raise StorageReadFailedError(message="Failed to read image")
            yield data[start:start + chunk_size]

    def exists(self, *, key) -> bool:
        return key in self.objects

    def get_metadata(self, *, key) -> BlobEntry:
        if key in self.fail_metadata_for:
            raise StorageReadFailedError(message="Failed to fetch image metadata")
        if key not in self.objects:
            raise NotFoundError(message="Image not found")
        data, content_type, metadata, last_modified = self.objects[key]
        return BlobEntry(
            key=key,
            size=len(data),
            content_type=content_type,
            last_modified=last_modified,
            metadata=metadata,
        )

    def list_keys(self, *, prefix) -> list[str]:
        if self.fail_list:
            raise StorageReadFailedError(message="Failed to fetch images")
        return [key for key in self.objects if key.startswith(prefix)]

    def remove_blob(self, *, key) -> None:
        if self.fail_delete:
            raise DeleteFailedError(message="Failed to delete image")
        self.objects.pop(key, None)


@pytest.fixture
def memory_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()
