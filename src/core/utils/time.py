"""
Time-related utilities for the application.

All timestamps are generated in UTC. Epoch milliseconds feed object keys,
ISO-8601 strings feed API responses.
"""

from datetime import datetime, timezone
import time


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def epoch_millis() -> int:
    """Return the current Unix time in whole milliseconds."""
    return time.time_ns() // 1_000_000
