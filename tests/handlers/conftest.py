from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def list_images_event() -> dict[str, Any]:
    return {"httpMethod": "GET", "path": "/images", "headers": {}}


@pytest.fixture
def get_image_event():
    def _event(key: str, *, greedy: bool = True) -> dict[str, Any]:
        event: dict[str, Any] = {
            "httpMethod": "GET",
            "path": f"/image/{key}",
            "headers": {},
        }
        if greedy:
            event["pathParameters"] = {"key": key}
        return event

    return _event


@pytest.fixture
def delete_image_event():
    def _event(key: str, *, greedy: bool = True) -> dict[str, Any]:
        event: dict[str, Any] = {
            "httpMethod": "DELETE",
            "path": f"/images/{key}",
            "headers": {},
        }
        if greedy:
            event["pathParameters"] = {"key": key}
        return event

    return _event
