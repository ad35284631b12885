"""
Lambda handler for the liveness probe (`GET /health`).
"""

from typing import Any

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel

from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class HealthResponse(BaseModel):
    status: str
    timestamp: str


@api_gateway_handler
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    logger.debug("Health check", extra={"path": event.get("path")})
    return ResponseBuilder.ok(HealthResponse(status="OK", timestamp=utc_now_iso()).model_dump())
