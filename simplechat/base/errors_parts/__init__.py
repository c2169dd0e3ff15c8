"""One-class-per-file implementations behind ``simplechat.base.errors``."""

from .error_code import ErrorCode
from .client_error import ClientError
from .classification import classify_exception, code_for_status
from .transport_error import TransportError
from .decode_error import DecodeError

__all__ = [
    "ErrorCode",
    "ClientError",
    "TransportError",
    "DecodeError",
    "classify_exception",
    "code_for_status",
]
