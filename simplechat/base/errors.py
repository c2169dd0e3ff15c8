"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``simplechat.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.client_error import ClientError
from .errors_parts.transport_error import TransportError
from .errors_parts.decode_error import DecodeError
from .errors_parts.classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ClientError",
    "TransportError",
    "DecodeError",
    "classify_exception",
    "code_for_status",
]
