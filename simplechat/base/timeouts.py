"""Timeout configuration for HTTP calls.

This module centralizes timeout values used by the pooled HTTP clients so no
call site introduces its own numeric literals.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use. The cache is refreshed when the relevant variables change so
    tests can adjust values with ``monkeypatch``. Supported variables (all
    optional):
        SIMPLECHAT_TIMEOUT_CONNECT_SECONDS
        SIMPLECHAT_TIMEOUT_READ_SECONDS
        SIMPLECHAT_TIMEOUT_HTTP_SECONDS

Notes
-----
The read timeout bounds the wait for the *next line* of a streaming body, not
the whole stream. Cancelling a stream shuts down the socket under its response,
which ends a pending read at once; the read timeout plays no part in that.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish a connection.
        read_timeout_seconds: Idle time allowed between two reads of a
            streaming body (or before response headers arrive).
        http_timeout_seconds: Timeout applied to the remaining phases (write,
            pool acquisition) and to non-streaming requests as a whole.
    """

    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0

    def to_httpx(self) -> httpx.Timeout:
        """Build the ``httpx.Timeout`` used by pooled clients."""
        return httpx.Timeout(
            self.http_timeout_seconds,
            connect=self.connect_timeout_seconds,
            read=self.read_timeout_seconds,
        )


_ENV_NAMES = (
    "SIMPLECHAT_TIMEOUT_CONNECT_SECONDS",
    "SIMPLECHAT_TIMEOUT_READ_SECONDS",
    "SIMPLECHAT_TIMEOUT_HTTP_SECONDS",
)

_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_timeout_seconds),
        read_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.read_timeout_seconds),
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.http_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
