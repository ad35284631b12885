"""
Lambda handler responsible for deleting an image (`DELETE /images/{key+}`).
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import DeleteFailedError
from core.utils.constants import DELETE_ROUTE_PREFIX
from core.utils.decorators import api_gateway_handler, error_response, request_context
from core.utils.keys import extract_key
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteImageRequest, DeleteImageResponse
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image deletion requests.

    This function:
    - Reassembles the full key from the greedy path parameter
    - Validates the incoming request
    - Delegates deletion to the service layer
    - Translates domain errors into HTTP responses

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info("Received image delete request", extra=request_context(event, context))
    request_id = getattr(context, "aws_request_id", None)

    try:
        request = validate_request(
            DeleteImageRequest,
            {"key": extract_key(event, DELETE_ROUTE_PREFIX)},
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

    service = DeleteService()

    try:
        key = service.delete_image(request.key)
    except DeleteFailedError as exc:
        logger.exception(
            "Deletion failed",
            extra={"key": request.key, "details": exc.details},
        )
        return error_response(exc, request_id=request_id)

    response = DeleteImageResponse(
        message="Image deleted successfully",
        file_name=key,
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
