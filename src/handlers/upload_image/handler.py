"""
Lambda handler responsible for image upload (`POST /upload`).
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import (
    InvalidInputError,
    PayloadTooLargeError,
    StorageWriteFailedError,
    UnsupportedMediaTypeError,
)
from core.utils.decorators import api_gateway_handler, error_response, request_context
from core.utils.response import ResponseBuilder
from core.utils.validators import get_header

from .models import ImageUploadResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests.

    The handler decodes the multipart body, validates the `image` part,
    writes it to storage and returns the assigned key with its proxy URL.

    Expected API Gateway event structure:
    {
        "headers": {"Content-Type": "multipart/form-data; boundary=..."},
        "body": "...",             # multipart body, base64 when binary
        "isBase64Encoded": true
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response with the stored key and URL
    """
    logger.info("Received image upload request", extra=request_context(event, context))
    request_id = getattr(context, "aws_request_id", None)

    try:
        body = UploadService.decode_body(event)
        request = UploadService.parse_request(
            body,
            get_header(event.get("headers"), "Content-Type"),
        )
    except (InvalidInputError, PayloadTooLargeError, UnsupportedMediaTypeError) as exc:
        logger.warning(
            "Upload rejected",
            extra={"error_code": exc.error_code, "error": exc.message},
        )
        return error_response(exc, request_id=request_id)

    service = UploadService()

    try:
        key, url = service.upload_image(request)
    except StorageWriteFailedError as exc:
        logger.exception(
            "Storage error during image upload",
            extra={"file_name": request.file_name},
        )
        return error_response(exc, request_id=request_id)

    response = ImageUploadResponse(
        message="Upload successful",
        file_name=key,
        url=url,
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
