"""Custom exception classes for the image gallery service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_DELETE_FAILED,
    ERROR_CODE_INTERNAL_ERROR,
    ERROR_CODE_INVALID_INPUT,
    ERROR_CODE_NOT_FOUND,
    ERROR_CODE_PAYLOAD_TOO_LARGE,
    ERROR_CODE_STORAGE_READ_FAILED,
    ERROR_CODE_STORAGE_WRITE_FAILED,
    ERROR_CODE_UNSUPPORTED_MEDIA_TYPE,
)


class ImageServiceError(Exception):
    """
    Base exception for all image service errors.

    All custom errors must inherit from this class.
    Subclasses supply a default error code; callers provide the message.
    Optional contextual information can be supplied via `details`.
    """

    default_error_code: str = ERROR_CODE_INTERNAL_ERROR

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

        super().__init__(self.message)


class InvalidInputError(ImageServiceError):
    """Raised when the request is missing data or is malformed."""

    default_error_code = ERROR_CODE_INVALID_INPUT


class PayloadTooLargeError(ImageServiceError):
    """Raised when an uploaded file exceeds the size limit."""

    default_error_code = ERROR_CODE_PAYLOAD_TOO_LARGE


class UnsupportedMediaTypeError(ImageServiceError):
    """Raised when an uploaded file is not declared as an image."""

    default_error_code = ERROR_CODE_UNSUPPORTED_MEDIA_TYPE


class NotFoundError(ImageServiceError):
    """Raised when a requested object does not exist."""

    default_error_code = ERROR_CODE_NOT_FOUND


class StorageWriteFailedError(ImageServiceError):
    """Raised when writing an object to the blob store fails."""

    default_error_code = ERROR_CODE_STORAGE_WRITE_FAILED


class StorageReadFailedError(ImageServiceError):
    """Raised when listing, inspecting or reading objects fails."""

    default_error_code = ERROR_CODE_STORAGE_READ_FAILED


class DeleteFailedError(ImageServiceError):
    """Raised when an object could not be deleted, including when it is absent."""

    default_error_code = ERROR_CODE_DELETE_FAILED


class InternalError(ImageServiceError):
    """Raised for unexpected failures."""

    default_error_code = ERROR_CODE_INTERNAL_ERROR
