"""ChunkStream: the cancellable lazy sequence returned by streaming calls.

A thin iterator façade over :class:`SSEStreamDriver`. Splitting it out keeps
the driver focused on the read loop while this class carries the
caller-facing API (``cancel``, ``close``, outcome inspection).
"""
from __future__ import annotations

from typing import Generic, Iterator, Optional, TypeVar

from ..cancellation import CancellationToken
from ..errors import ClientError
from .stream_driver import SSEStreamDriver
from .stream_state import StreamState
from .streaming_metrics import StreamMetrics

T = TypeVar("T")


class ChunkStream(Generic[T]):
    """Single-pass iterator of decoded chunks.

    Responsibilities:
      * Open the stream on first ``next()`` and yield chunks in arrival order.
      * Expose ``cancel(reason)`` for cooperative cancellation from any thread.
      * Report how the stream ended: ``state`` is ``DONE``, ``CANCELLED`` or
        ``FAILED`` once iteration is over; ``error`` holds the failure.

    Failures (``TransportError``, ``DecodeError``) are raised from ``next()``;
    cancellation simply ends iteration. Once terminal, further iteration
    yields nothing.
    """

    def __init__(self, driver: SSEStreamDriver[T], token: CancellationToken) -> None:
        self._driver = driver
        self._token = token
        self._iterator: Optional[Iterator[T]] = None

    def __iter__(self) -> "ChunkStream[T]":
        return self

    def __next__(self) -> T:
        if self._iterator is None:
            self._iterator = self._driver.run()
        return next(self._iterator)

    def __enter__(self) -> "ChunkStream[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # API -----------------------------------------------------------------
    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation of this stream.

        Safe to invoke multiple times, from another thread, or after completion.
        """
        self._token.cancel(reason)

    def close(self) -> None:
        """Stop iterating and release the connection.

        A stream closed before reaching a terminal state ends as ``CANCELLED``.
        """
        if self._iterator is None:
            self._iterator = iter(())
            self._driver.abandon()
            return
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def state(self) -> StreamState:  # noqa: D401 - short property
        """Current lifecycle state."""
        return self._driver.state

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether the stream reached a terminal state."""
        return self._driver.state.terminal

    @property
    def cancelled(self) -> bool:
        return self._driver.state is StreamState.CANCELLED

    @property
    def error(self) -> ClientError | None:  # noqa: D401 - short property
        """The failure that ended the stream, if any."""
        return self._driver.error

    @property
    def metrics(self) -> StreamMetrics:
        return self._driver.metrics


__all__ = ["ChunkStream"]
