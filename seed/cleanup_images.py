#!/usr/bin/env python3
"""
Cleanup script to remove every gallery image via API endpoints.

Run:
    python seed/cleanup_images.py \
      --api-id <API-ID>
"""

import argparse
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="cleanup")

BASE_API_URL = "http://localhost:4566/restapis/{0}/{1}/_user_request_"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cleanup images via Image Gallery API")

    parser.add_argument(
        "--api-id",
        required=True,
        help="API Gateway ID (LocalStack)",
    )
    parser.add_argument(
        "--stage",
        default="local",
        help="API Gateway stage name",
    )

    return parser.parse_args()


def cleanup_images() -> None:
    try:
        args = parse_args()
        base_url = BASE_API_URL.format(args.api_id, args.stage)

        logger.info("Starting cleanup process", extra={"api_base_url": base_url})

        response = requests.get(f"{base_url}/images", timeout=30)

        if not response.ok:
            logger.error(
                "Failed to list images",
                extra={"status": response.status_code, "response": response.text},
            )
            sys.exit(1)

        images = cast(list[dict[str, Any]], response.json())

        if not images:
            logger.info("No images found for cleanup")
            return

        for image in images:
            key = image["key"]

            delete_resp = requests.delete(f"{base_url}/images/{key}", timeout=30)

            if delete_resp.ok:
                logger.info("Deleted image", extra={"key": key})
            else:
                logger.error(
                    "Failed to delete image",
                    extra={
                        "key": key,
                        "status": delete_resp.status_code,
                        "response": delete_resp.text,
                    },
                )

        logger.info("Cleanup completed successfully")

    except Exception as exc:
        logger.exception("Cleanup failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    cleanup_images()
