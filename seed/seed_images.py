#!/usr/bin/env python3
"""
Seed script to populate the gallery via API endpoints.

Run:
    python seed/seed_images.py \
      --api-id <API-ID> \
      --images-dir ~/Pictures/samples
"""

import argparse
import mimetypes
from pathlib import Path
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")

BASE_API_URL = "http://localhost:4566/restapis/{0}/{1}/_user_request_"

SEED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".svg"}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed images via Image Gallery API")

    parser.add_argument(
        "--api-id",
        required=True,
        help="Base API ID (e.g. LocalStack API Gateway ID)",
    )
    parser.add_argument(
        "--stage",
        default="local",
        help="API Gateway stage name",
    )
    parser.add_argument(
        "--images-dir",
        type=Path,
        required=True,
        help="Directory holding the image files to upload",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=4,
        help="Number of images to seed",
    )

    return parser.parse_args()


def find_images(images_dir: Path, limit: int) -> list[Path]:
    paths = sorted(
        path for path in images_dir.iterdir() if path.is_file() and path.suffix.lower() in SEED_EXTENSIONS
    )
    return paths[:limit]


def seed_images() -> None:
    try:
        args = parse_args()
        base_url = BASE_API_URL.format(args.api_id, args.stage)

        if not args.images_dir.is_dir():
            logger.error("Images directory not found", extra={"path": str(args.images_dir)})
            sys.exit(1)

        logger.info(
            "Starting seeding process",
            extra={"api_base_url": base_url, "images_dir": str(args.images_dir)},
        )

        for image_path in find_images(args.images_dir, args.limit):
            content_type = mimetypes.guess_type(image_path.name)[0] or "application/octet-stream"

            with open(image_path, "rb") as f:
                response = requests.post(
                    f"{base_url}/upload",
                    files={"image": (image_path.name, f, content_type)},
                    timeout=30,
                )

            response_json = cast(dict[str, Any], response.json())

            if response.ok:
                logger.info(
                    "Seeded image",
                    extra={
                        "image": image_path.name,
                        "key": response_json.get("fileName"),
                    },
                )
            else:
                logger.error(
                    "Failed to seed image",
                    extra={
                        "image": image_path.name,
                        "status": response.status_code,
                        "response": response_json,
                    },
                )

        logger.info("Seeding completed")

        list_response = requests.get(f"{base_url}/images", timeout=30)

        logger.info(
            "List images response",
            extra={
                "status": list_response.status_code,
                "response": list_response.json() if list_response.ok else list_response.text,
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_images()
