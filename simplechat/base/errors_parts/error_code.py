"""
Error codes shared by every failure the client reports.

Values appear verbatim in the ``error_code`` field of structured log events,
so they are lowercase and never renamed.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    # HTTP status families
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    TRANSIENT = "transient"
    TIMEOUT = "timeout"
    # Client-side
    TRANSPORT = "transport"
    DECODE = "decode"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
