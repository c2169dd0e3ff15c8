"""
Decode failure raised when a payload does not match the expected document shape.
"""
from __future__ import annotations

from typing import Optional

from .client_error import ClientError
from .error_code import ErrorCode


class DecodeError(ClientError):
    """A payload was not valid JSON or did not match the requested shape.

    ``payload`` holds the exact raw text that failed so it can be inspected
    after the stream has ended.
    """

    def __init__(
        self,
        payload: str,
        reason: str,
        *,
        raw: Optional[Exception] = None,
    ) -> None:
        self.payload = payload
        self.reason = reason
        super().__init__(code=ErrorCode.DECODE, message=reason, raw=raw)


__all__ = ["DecodeError"]
