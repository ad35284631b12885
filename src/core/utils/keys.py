"""Object key construction, classification and path extraction."""

from pathlib import PurePosixPath
import secrets
from typing import Any
from urllib.parse import quote, unquote

from core.utils.constants import (
    IMAGE_EXTENSIONS,
    IMAGE_ROUTE_PREFIX,
    KEY_PATH_PARAMETER,
    MIME_TYPE_EXTENSION_MAP,
    RANDOM_SUFFIX_UPPER_BOUND,
    UPLOAD_PREFIX,
)
from core.utils.time import epoch_millis


def key_extension(filename: str | None, content_type: str | None) -> str:
    """Pick the extension for a new key.

    A known image suffix on the filename wins, then the suffix mapped from the
    declared MIME type, then whatever suffix the filename carries.
    """
    suffix = PurePosixPath(filename or "").suffix.lower()
    if suffix in IMAGE_EXTENSIONS:
        return suffix

    mapped = MIME_TYPE_EXTENSION_MAP.get((content_type or "").lower())
    if mapped:
        return mapped

    return suffix


def generate_key(
    filename: str | None,
    content_type: str | None,
    *,
    now_ms: int | None = None,
) -> str:
    """Build `uploads/<epochMillis>-<random><ext>` for a new upload."""
    timestamp = epoch_millis() if now_ms is None else now_ms
    suffix = secrets.randbelow(RANDOM_SUFFIX_UPPER_BOUND)
    return f"{UPLOAD_PREFIX}{timestamp}-{suffix}{key_extension(filename, content_type)}"


def image_url(key: str) -> str:
    """Return the proxy-serve path for a key."""
    return IMAGE_ROUTE_PREFIX + quote(key, safe="/")


def display_name(key: str) -> str:
    return PurePosixPath(key).name


def is_managed_key(key: str) -> bool:
    """True for keys this service created (under the upload prefix)."""
    return key.startswith(UPLOAD_PREFIX) and len(key) > len(UPLOAD_PREFIX)


def is_image_key(key: str) -> bool:
    return PurePosixPath(key).suffix.lower() in IMAGE_EXTENSIONS


def extract_key(event: dict[str, Any], route_prefix: str) -> str | None:
    """Reassemble the full object key from an API Gateway event.

    Greedy `{key+}` path parameters already carry every segment. Without one,
    the remainder of the raw path after `route_prefix` is used, so keys that
    contain `/` are never truncated.
    """
    path_params = event.get("pathParameters") or {}
    raw = path_params.get(KEY_PATH_PARAMETER)

    if raw is None:
        path = event.get("path") or ""
        index = path.find(route_prefix)
        if index < 0:
            return None
        raw = path[index + len(route_prefix):]

    return unquote(raw)
