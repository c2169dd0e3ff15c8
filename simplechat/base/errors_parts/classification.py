"""
Map HTTP statuses and arbitrary exceptions onto :class:`ErrorCode`.

``code_for_status`` is what ``TransportError`` uses to pick its code.
``classify_exception`` is the catch-all used when logging a failure whose
type is not known in advance.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from .client_error import ClientError
from .error_code import ErrorCode


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def code_for_status(status: int) -> ErrorCode:
    """Return the code for ``status``; unlisted 5xx is ``SERVER_ERROR``, anything else ``UNKNOWN``."""
    code = _HTTP_STATUS_MAP.get(status)
    if code is not None:
        return code
    return ErrorCode.SERVER_ERROR if 500 <= status < 600 else ErrorCode.UNKNOWN


def _valid_status(value: object) -> Optional[int]:
    return value if isinstance(value, int) and 100 <= value < 600 else None


def _extract_status(exc: Exception) -> Optional[int]:
    """Find an HTTP status on ``exc`` (``status``, ``status_code`` or ``response.status_code``)."""
    for candidate in (
        getattr(exc, "status", None),
        getattr(exc, "status_code", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    ):
        status = _valid_status(candidate)
        if status is not None:
            return status
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Return the :class:`ErrorCode` that best describes ``exc``.

    Checked in order: a ``ClientError``'s own code, timeouts, an attached HTTP
    status, other ``httpx`` transport failures, a "timed out" message, and
    finally ``UNKNOWN``.
    """
    if isinstance(exc, ClientError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None:
        return code_for_status(status)
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSPORT
    if "timed out" in str(exc).lower():
        return ErrorCode.TIMEOUT
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception", "code_for_status"]
