"""
Lambda handler responsible for listing gallery images (`GET /images`).
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import StorageReadFailedError
from core.utils.decorators import api_gateway_handler, error_response, request_context
from core.utils.response import ResponseBuilder

from .service import ListService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list images.

    Returns a JSON array of image records ordered newest-first. An empty
    bucket yields an empty array.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info("Received image list request", extra=request_context(event, context))

    service = ListService()

    try:
        records = service.list_images()
    except StorageReadFailedError as exc:
        logger.exception("Error listing images")
        return error_response(exc, request_id=getattr(context, "aws_request_id", None))

    return ResponseBuilder.ok(
        [record.model_dump(mode="json", by_alias=True) for record in records]
    )
