"""
Transport failure raised for non-success HTTP statuses and broken connections.
"""
from __future__ import annotations

from typing import Optional

from .classification import code_for_status
from .client_error import ClientError
from .error_code import ErrorCode


class TransportError(ClientError):
    """HTTP-level failure.

    ``status`` is the HTTP status code, or ``None`` when the connection failed
    before (or while) a response was received. ``reason`` is the server's
    reason phrase, kept verbatim.
    """

    def __init__(
        self,
        status: Optional[int],
        reason: Optional[str],
        *,
        raw: Optional[Exception] = None,
    ) -> None:
        self.status = status
        self.reason = reason
        code = code_for_status(status) if status is not None else ErrorCode.TRANSPORT
        message = f"HTTP {status} {reason or ''}".strip() if status is not None else (reason or "transport failure")
        super().__init__(code=code, message=message, raw=raw)


__all__ = ["TransportError"]
