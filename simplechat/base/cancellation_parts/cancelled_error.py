"""Exception signalling that a cancellation request was observed."""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised by ``raise_if_cancelled`` and by ``open_stream``.

    The stream driver turns it into the ``CANCELLED`` state; callers iterating
    a stream never see it.
    """


__all__ = ["CancelledError"]
