"""
Time source used by the protocol.

Every component takes a ``clock`` callable so expiry can be driven
deterministically in tests.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time, timezone-aware UTC, millisecond precision."""
    return normalize_timestamp(datetime.now(timezone.utc))


def normalize_timestamp(value: datetime) -> datetime:
    """
    Convert to UTC and truncate to milliseconds.

    Raises:
        ValueError: If value is naive (no tzinfo)
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("Timestamp must be timezone-aware")
    value = value.astimezone(timezone.utc)
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)
