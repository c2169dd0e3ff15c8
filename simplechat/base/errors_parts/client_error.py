"""
Base exception of the client.

Every failure surfaced to callers (HTTP status, broken connection, payload
that does not decode) is a ``ClientError`` with a normalized code.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ClientError(Exception):
    """Failure carrying an :class:`ErrorCode`, a readable message and the underlying exception."""

    code: ErrorCode
    message: str
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


__all__ = ["ClientError"]
