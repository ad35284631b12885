"""
E2E fixtures. These tests run against the gallery API deployed on LocalStack
and are skipped when no such deployment is reachable.
"""

import base64
import logging
import os

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError
import pytest
import requests

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

ENDPOINT_BASE_URL = os.getenv("E2E_ENDPOINT_URL", "http://localhost:4566")
S3_IMAGE_BUCKET_NAME = os.getenv("E2E_IMAGE_BUCKET", "image-gallery-images-local")
API_NAME_FRAGMENT = "image-gallery"
STAGE = os.getenv("E2E_STAGE", "local")

LOCALSTACK_CONFIG = Config(connect_timeout=2, read_timeout=10, retries={"max_attempts": 1})


class E2EAPIClient:
    """Wrapper for making HTTP requests to the gallery API"""

    def __init__(self, endpoint: str, timeout: float = 30) -> None:
        self.endpoint = endpoint
        self.timeout = timeout

    def upload(
        self,
        data: bytes,
        filename: str = "sample.jpg",
        content_type: str = "image/jpeg",
        field_name: str = "image",
    ) -> requests.Response:
        files = {field_name: (filename, data, content_type)}
        return requests.post(f"{self.endpoint}/upload", files=files, timeout=self.timeout)

    def list_images(self) -> requests.Response:
        return requests.get(f"{self.endpoint}/images", timeout=self.timeout)

    def get_image(self, key: str) -> requests.Response:
        return requests.get(f"{self.endpoint}/image/{key}", timeout=self.timeout)

    def delete_image(self, key: str) -> requests.Response:
        return requests.delete(f"{self.endpoint}/images/{key}", timeout=self.timeout)

    def health(self) -> requests.Response:
        return requests.get(f"{self.endpoint}/health", timeout=self.timeout)


@pytest.fixture(scope="session")
def api_details():
    """Get API Gateway details from LocalStack"""
    try:
        apigateway = boto3.client(
            "apigateway",
            endpoint_url=ENDPOINT_BASE_URL,
            config=LOCALSTACK_CONFIG,
        )

        apis = apigateway.get_rest_apis()
        api = next(api for api in apis["items"] if API_NAME_FRAGMENT in api["name"])
        api_id = api["id"]

        endpoint = f"{ENDPOINT_BASE_URL}/restapis/{api_id}/{STAGE}/_user_request_"

        return {"api_id": api_id, "endpoint": endpoint, "stage": STAGE}
    except Exception as e:
        logger.warning(f"Could not get API details from LocalStack: {e}")
        pytest.skip(f"Could not get API details from LocalStack: {e}")


@pytest.fixture
def api_client(api_details):
    """HTTP client wrapper for E2E API testing"""
    yield E2EAPIClient(api_details["endpoint"])


@pytest.fixture(scope="function", autouse=True)
def cleanup_storage_after_each_test(api_details):
    """Empty the image bucket so tests never see each other's uploads."""
    yield
    _cleanup_s3()


def _cleanup_s3():
    logger.info("Cleaning S3 bucket: %s", S3_IMAGE_BUCKET_NAME)

    s3_client = boto3.client("s3", endpoint_url=ENDPOINT_BASE_URL, config=LOCALSTACK_CONFIG)

    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        deleted = 0
        for page in paginator.paginate(Bucket=S3_IMAGE_BUCKET_NAME):
            for obj in page.get("Contents", []):
                s3_client.delete_object(Bucket=S3_IMAGE_BUCKET_NAME, Key=obj["Key"])
                deleted += 1

        logger.info("Deleted %d objects from S3 bucket", deleted)

    except ClientError as err:
        logger.error("Failed to cleanup S3 bucket: %s", S3_IMAGE_BUCKET_NAME, exc_info=err)


# ============================================================================
# Sample Image Data
# ============================================================================

SAMPLE_JPEG_BASE64 = "/9j/4AAQSkZJRgABAQEAYABgAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8UHRofHh0aHBwgJC4nICIsIxwcKDcpLDAxNDQ0Hyc5PTgyPC4zNDL/2wBDAQkJCQwLDBgNDRgyIRwhMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjL/wAARCAABAAEDASIAAhEBAxEB/8QAFQABAQAAAAAAAAAAAAAAAAAAAAv/xAAUEAEAAAAAAAAAAAAAAAAAAAAA/8VAFQEBAQAAAAAAAAAAAAAAAAAAAAX/xAAUEQEAAAAAAAAAAAAAAAAAAAAA/9oADAMBAAIRAxEAPwCwAA8A/9k="


@pytest.fixture
def sample_jpeg() -> bytes:
    return base64.b64decode(SAMPLE_JPEG_BASE64)


@pytest.fixture
def uploaded_key(api_client, sample_jpeg) -> str:
    """Upload one image and return its object key."""
    response = api_client.upload(sample_jpeg)
    assert response.status_code == 200, f"Upload failed: {response.text}"
    return response.json()["fileName"]
