"""
Lambda handler responsible for proxy-serving image bytes (`GET /image/{key+}`).
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import NotFoundError, StorageReadFailedError
from core.utils.constants import IMAGE_ROUTE_PREFIX
from core.utils.decorators import api_gateway_handler, error_response, request_context
from core.utils.keys import extract_key
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import GetImageRequest
from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image view requests.

    This function:
    - Reassembles the full key from the greedy path parameter
    - Returns 404 for keys that are not stored uploads
    - Streams the object into a binary response with content type and
      cache headers

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    logger.info("Received image view request", extra=request_context(event, context))
    request_id = getattr(context, "aws_request_id", None)

    try:
        request = validate_request(
            GetImageRequest,
            {"key": extract_key(event, IMAGE_ROUTE_PREFIX)},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.validation_error(
            message="Invalid image key",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    service = GetService()

    try:
        entry, chunks = service.open_image(request.key)
        headers = service.response_headers(entry)
        return ResponseBuilder.stream_response(
            chunks,
            content_type=headers.pop("Content-Type"),
            headers=headers,
        )

    except NotFoundError as exc:
        logger.info("Image not found", extra={"key": request.key})
        return error_response(exc, request_id=request_id)

    except StorageReadFailedError as exc:
        logger.exception(
            "Image stream failed",
            extra={"key": request.key},
        )
        return error_response(exc, request_id=request_id)
