"""Global constants used throughout the application.

This module centralizes the magic numbers, string literals, and configuration
names shared by the handlers and the storage layer.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Client Errors
ERROR_CODE_INVALID_INPUT = "INVALID_INPUT"
ERROR_CODE_PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
ERROR_CODE_UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"

# Not Found Errors
ERROR_CODE_NOT_FOUND = "NOT_FOUND"

# Storage Errors
ERROR_CODE_STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"
ERROR_CODE_STORAGE_READ_FAILED = "STORAGE_READ_FAILED"
ERROR_CODE_DELETE_FAILED = "DELETE_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MiB in bytes

UPLOAD_FIELD_NAME = "image"
IMAGE_MIME_PREFIX = "image/"

MIME_TYPE_EXTENSION_MAP: Final[dict[str, str]] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/bmp": ".bmp",
    "image/svg+xml": ".svg",
}

IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".svg"}
)

# ============================================================================
# Storage Layout
# ============================================================================

UPLOAD_PREFIX = "uploads/"
RANDOM_SUFFIX_UPPER_BOUND = 1_000_000_000
ORIGINAL_NAME_METADATA_KEY = "original-name"
STREAM_CHUNK_SIZE = 64 * 1024

# ============================================================================
# Routes
# ============================================================================

IMAGE_ROUTE_PREFIX = "/image/"
DELETE_ROUTE_PREFIX = "/images/"
KEY_PATH_PARAMETER = "key"

# ============================================================================
# Response Headers
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization"
EXPOSE_HEADERS = "Content-Type,Content-Length,Cache-Control"
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"
IMAGE_CACHE_CONTROL = "public, max-age=86400"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)
