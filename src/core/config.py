"""Process-level configuration read from the environment."""

from dataclasses import dataclass
from functools import lru_cache
import os

from core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_S3_BUCKET_NAME,
)


@dataclass(frozen=True)
class Settings:
    """Storage settings resolved once per process."""

    bucket_name: str | None
    endpoint_url: str | None
    region: str | None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings from the environment on first use and cache them."""
    return Settings(
        bucket_name=os.getenv(ENV_IMAGE_S3_BUCKET_NAME),
        endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
        region=os.getenv(ENV_AWS_REGION),
    )
