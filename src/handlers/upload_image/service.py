"""Business logic for image upload operations.

This module turns a multipart request body into a validated upload, assigns
it a fresh object key and writes it to the blob store, translating failures
into domain-specific errors.
"""

import base64
import binascii
from typing import Any
from urllib.parse import quote

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_blob_store import S3BlobStore
from core.models.errors import (
    InvalidInputError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
)
from core.repositories.storage_repository import BlobStoreRepository
from core.utils.constants import (
    IMAGE_MIME_PREFIX,
    MAX_FILE_SIZE,
    ORIGINAL_NAME_METADATA_KEY,
    UPLOAD_FIELD_NAME,
    get_max_file_size_mb,
)
from core.utils.keys import generate_key, image_url
from core.utils.mime import detect_mime_type
from core.utils.multipart import parse_multipart

from .models import ImageUploadRequest

logger = Logger(UTC=True)

FALLBACK_CONTENT_TYPE = "application/octet-stream"


class UploadService:
    """Application service responsible for image uploads.

    This service orchestrates:
    - Body decoding and multipart parsing
    - Presence, size and MIME type validation
    - Key generation
    - Writing the image to storage
    """

    def __init__(self, storage: BlobStoreRepository | None = None) -> None:
        """Initialize the upload service with its storage dependency."""
        self.storage = storage or S3BlobStore()

    @staticmethod
    def decode_body(event: dict[str, Any]) -> bytes:
        """Return the raw request body of an API Gateway proxy event.

        Raises:
            InvalidInputError: If the body is missing or not valid base64
        """
        body = event.get("body")
        if not body:
            raise InvalidInputError(message="No file uploaded")

        if not event.get("isBase64Encoded"):
            return body.encode("utf-8")

        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.exception("Failed to decode base64 request body")
            raise InvalidInputError(
                message="Invalid request body",
                details={"encoding": "base64"},
            ) from exc

    @staticmethod
    def parse_request(body: bytes, content_type: str | None) -> ImageUploadRequest:
        """Extract and validate the `image` part of a multipart body.

        Raises:
            InvalidInputError: If no usable file part is present
            PayloadTooLargeError: If the file exceeds the size limit
            UnsupportedMediaTypeError: If the file is not declared as an image
        """
        parts = parse_multipart(body, content_type, max_part_size=MAX_FILE_SIZE)

        part = parts.get(UPLOAD_FIELD_NAME)
        if part is None or not part.is_file:
            raise InvalidInputError(message="No file uploaded")

        if part.size > MAX_FILE_SIZE:
            logger.warning(
                "Upload exceeds size limit",
                extra={"size": part.size, "limit": MAX_FILE_SIZE},
            )
            raise PayloadTooLargeError(
                message=f"File too large (max {get_max_file_size_mb()}MB)",
                details={"size": part.size},
            )

        if part.size == 0:
            raise InvalidInputError(message="Uploaded file is empty")

        data = bytes(part.data)
        content_type = part.content_type or detect_mime_type(data) or FALLBACK_CONTENT_TYPE

        if not content_type.lower().startswith(IMAGE_MIME_PREFIX):
            logger.warning(
                "Unsupported MIME type",
                extra={"content_type": content_type},
            )
            raise UnsupportedMediaTypeError(
                message="Only image files are allowed!",
                details={"content_type": content_type},
            )

        return ImageUploadRequest(
            file_name=part.filename or None,
            content_type=content_type,
            data=data,
            size=part.size,
        )

    def upload_image(self, request: ImageUploadRequest) -> tuple[str, str]:
        """Store a validated upload under a freshly generated key.

        Returns:
            Tuple of (key, proxy_url)

        Raises:
            StorageWriteFailedError: If the store write fails
        """
        key = generate_key(request.file_name, request.content_type)

        logger.debug(
            "Starting image upload",
            extra={"key": key, "size": request.size, "content_type": request.content_type},
        )

        metadata: dict[str, str] = {}
        if request.file_name:
            # S3 user metadata must be ASCII
            metadata[ORIGINAL_NAME_METADATA_KEY] = quote(request.file_name)

        self.storage.put_blob(
            key=key,
            data=request.data,
            content_type=request.content_type,
            metadata=metadata,
        )

        logger.info("Image uploaded successfully", extra={"key": key})
        return key, image_url(key)
