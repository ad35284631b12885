"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import (
    ImageServiceError,
    InvalidInputError,
    NotFoundError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
)
from core.utils.constants import ERROR_CODE_INTERNAL_ERROR
from core.utils.response import ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]

_CLIENT_ERRORS = (InvalidInputError, PayloadTooLargeError, UnsupportedMediaTypeError)


def error_response(exc: ImageServiceError, *, request_id: str | None = None) -> JsonDict:
    """Map a domain error onto its HTTP response."""
    if isinstance(exc, _CLIENT_ERRORS):
        status = HTTPStatus.BAD_REQUEST
    elif isinstance(exc, NotFoundError):
        status = HTTPStatus.NOT_FOUND
    else:
        status = HTTPStatus.INTERNAL_SERVER_ERROR

    return ResponseBuilder.error(
        status=status,
        message=exc.message,
        code=exc.error_code,
        request_id=request_id,
    )


def request_context(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Structured log fields describing the incoming request."""
    return {
        "http_method": event.get("httpMethod"),
        "path": event.get("path"),
        "request_id": getattr(context, "aws_request_id", None),
        "function_name": getattr(context, "function_name", None),
    }


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Mapping of escaped domain errors to HTTP responses
    - A JSON 500 for anything unexpected, so one request never takes the
      function down

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"status": "OK"})
    """

    @wraps(func)
    def wrapper(event: Any, context: Any) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content()

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except ImageServiceError as exc:
            logger.warning(
                "Unhandled domain error in handler",
                extra={
                    "handler": func.__name__,
                    "request_id": request_id,
                    "error_code": exc.error_code,
                    "error": exc.message,
                },
            )
            return error_response(exc, request_id=request_id)

        except Exception as exc:
            logger.exception(
                "Unexpected error in handler",
                extra={
                    "handler": func.__name__,
                    "request_id": request_id,
                    "error_type": type(exc).__name__,
                },
            )
            return ResponseBuilder.internal_error(
                "Internal server error",
                code=ERROR_CODE_INTERNAL_ERROR,
                request_id=request_id,
            )

    return wrapper
