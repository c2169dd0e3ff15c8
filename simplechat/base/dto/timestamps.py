"""Unix epoch timestamp handling for response documents.

Every ``created`` field the service returns is an integer count of seconds
since the Unix epoch. ``UnixTimestamp`` decodes it into a timezone-aware UTC
``datetime`` and serializes it back to integer seconds, so a decode/encode
round trip is exact to the second.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def from_unix_seconds(value: int | float) -> datetime:
    """Return the UTC point in time ``value`` seconds after the epoch (sub-second part dropped)."""
    return datetime.fromtimestamp(math.floor(value), tz=timezone.utc)


def to_unix_seconds(value: datetime) -> int:
    """Return whole epoch seconds for ``value``; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return math.floor(value.timestamp())


def _coerce_timestamp(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    # bool is an int subclass; true/false is never a timestamp.
    if isinstance(value, bool):
        raise ValueError("expected epoch seconds, got a boolean")
    if isinstance(value, (int, float)):
        try:
            return from_unix_seconds(value)
        except (OverflowError, OSError, ValueError) as exc:
            # Out of range for the platform clock, or NaN/infinity.
            raise ValueError(f"epoch seconds out of range: {value!r}") from exc
    raise ValueError(f"expected epoch seconds, got {type(value).__name__}")


UnixTimestamp = Annotated[
    datetime,
    BeforeValidator(_coerce_timestamp),
    PlainSerializer(to_unix_seconds, return_type=int),
]


__all__ = ["UnixTimestamp", "from_unix_seconds", "to_unix_seconds"]
