"""
Centralized API response builder for AWS Lambda / API Gateway.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Iterable
from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]
JsonBody = JsonDict | list[Any]


def encode_chunks(chunks: Iterable[bytes]) -> tuple[str, int]:
    """Base64-encode a chunk stream incrementally.

    Chunks are re-aligned on 3-byte boundaries so that concatenating the
    encoded pieces equals encoding the whole payload at once.

    Returns:
        Tuple of (base64_text, byte_count)
    """
    pieces: list[str] = []
    carry = b""
    total = 0

    for chunk in chunks:
        total += len(chunk)
        data = carry + chunk
        cut = len(data) - len(data) % 3
        if cut:
            pieces.append(base64.b64encode(data[:cut]).decode("ascii"))
        carry = data[cut:]

    if carry:
        pieces.append(base64.b64encode(carry).decode("ascii"))

    return "".join(pieces), total


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": DEFAULT_CONTENT_TYPE,
    }

    DEFAULT_CORS_HEADERS: dict[str, str] = {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }

    @staticmethod
    def _build_headers() -> dict[str, str]:
        headers: dict[str, str] = dict(ResponseBuilder.DEFAULT_HEADERS)

        # Always include CORS headers
        headers.update(ResponseBuilder.DEFAULT_CORS_HEADERS)

        return headers

    @staticmethod
    def _response(
        *,
        status: HTTPStatus,
        body: JsonBody | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        payload: JsonBody

        if isinstance(body, list):
            # Arrays are returned bare; request_id only rides on objects
            payload = body
        else:
            payload = dict(body or {})
            if request_id:
                payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": ResponseBuilder._build_headers(),
            "body": json.dumps(payload),
        }

    @staticmethod
    def ok(
        body: JsonBody,
        *,
        request_id: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder._response(
            status=HTTPStatus.OK,
            body=body,
            request_id=request_id,
        )

    @staticmethod
    def no_content() -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": ResponseBuilder._build_headers(),
            "body": "",
        }

    @staticmethod
    def error(
        *,
        status: HTTPStatus,
        message: str,
        code: str | None = None,
        details: JsonBody | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": message,
            "code": code or status.name,
            "timestamp": utc_now_iso(),
        }

        if details:
            payload["details"] = details

        return ResponseBuilder._response(
            status=status,
            body=payload,
            request_id=request_id,
        )

    @staticmethod
    def validation_error(
        *,
        message: str,
        details: JsonBody | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        """400 Bad Request carrying sanitized validation details."""
        return ResponseBuilder.error(
            status=HTTPStatus.BAD_REQUEST,
            code=ERROR_CODE_VALIDATION_FAILED,
            message=message,
            details=details,
            request_id=request_id,
        )

    @staticmethod
    def internal_error(
        message: str = "Internal server error",
        *,
        code: str | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=message,
            code=code,
            request_id=request_id,
        )

    @staticmethod
    def stream_response(
        chunks: Iterable[bytes],
        *,
        content_type: str,
        headers: dict[str, str] | None = None,
    ) -> JsonDict:
        """Binary proxy response built from a chunk stream.

        Exceptions raised while consuming `chunks` propagate before any
        response exists, so the caller can still answer with an error.
        """
        body, length = encode_chunks(chunks)

        response_headers: dict[str, str] = {
            "Content-Type": content_type,
            "Content-Length": str(length),
            "Access-Control-Allow-Origin": CORS_ORIGIN,
            "Access-Control-Expose-Headers": EXPOSE_HEADERS,
        }

        if headers:
            response_headers.update(headers)

        return {
            "statusCode": HTTPStatus.OK.value,
            "headers": response_headers,
            "body": body,
            "isBase64Encoded": True,
        }
