"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose cancellation constructs via the canonical
``simplechat.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the external signal a caller (for example a Ctrl+C
  handler) uses to end a streaming call.
- ``CancelledError`` is raised by operations that observe a cancellation
  request before any network activity has started.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
