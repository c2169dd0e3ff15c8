"""Lifecycle states of one streaming call."""

from __future__ import annotations

from enum import Enum


class StreamState(str, Enum):
    """``IDLE -> OPENING -> STREAMING -> (DONE | CANCELLED | FAILED)``."""

    IDLE = "idle"
    OPENING = "opening"
    STREAMING = "streaming"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (StreamState.DONE, StreamState.CANCELLED, StreamState.FAILED)


__all__ = ["StreamState"]
