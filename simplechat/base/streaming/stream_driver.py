"""SSE stream driver: the read loop behind every streaming call.

One driver serves both completions and chat completions; the only part that
differs between them is the ``decoder`` passed in.

Lifecycle
---------
``IDLE -> OPENING -> STREAMING -> (DONE | CANCELLED | FAILED)``

- The response is opened lazily, on the first ``next()``.
- Every loop iteration checks the cancellation token before reading the
  next line. Cancellation ends the sequence quietly; it is not an error.
- Lines without a payload are skipped. ``[DONE]`` ends the stream and is
  never decoded. A decode failure ends the stream with ``DecodeError``.
- The response is released exactly once on every terminal path. Cancelling
  the token also shuts down the socket from the cancelling thread, so a read
  blocked on a stalled server returns at once and the stream ends CANCELLED.
- Any failure ends the stream FAILED: a decoder that raises something other
  than ``DecodeError`` is still a decode failure, and anything unexpected is
  wrapped in a ``ClientError`` with a classified code.

Nothing is retried and nothing is reordered; at most one line is held at a
time. The terminal log event is ``stream.cancelled`` for cancellation,
``stream.error`` for failures and ``stream.end`` otherwise.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Generic, Iterator, Optional, TypeVar

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import ClientError, DecodeError, TransportError, classify_exception
from ..http import interrupt_read
from ..logging import LogContext, normalized_log_event
from .sse import extract_payload, is_sentinel
from .stream_state import StreamState
from .streaming_metrics import StreamMetrics

T = TypeVar("T")

Opener = Callable[[CancellationToken], httpx.Response]
Decoder = Callable[[str], T]


def _as_client_error(exc: Exception) -> ClientError:
    if isinstance(exc, ClientError):
        return exc
    return ClientError(classify_exception(exc), str(exc) or exc.__class__.__name__, raw=exc)


class SSEStreamDriver(Generic[T]):
    """Read an event-stream response line by line and yield decoded chunks."""

    def __init__(
        self,
        *,
        opener: Opener,
        decoder: Decoder[T],
        token: CancellationToken,
        logger: logging.Logger,
        ctx: LogContext,
    ) -> None:
        self._opener = opener
        self._decoder = decoder
        self._token = token
        self._logger = logger
        self.ctx = ctx
        self.state = StreamState.IDLE
        self.error: Optional[ClientError] = None
        self.metrics = StreamMetrics()
        self._response: Optional[httpx.Response] = None
        self._unregister: Optional[Callable[[], None]] = None
        self._released = False
        self._lock = threading.Lock()
        self._t0 = 0.0

    # Lifecycle -----------------------------------------------------------
    def run(self) -> Iterator[T]:
        """Execute the streaming lifecycle as a single-pass generator."""
        self._t0 = time.perf_counter()
        normalized_log_event(self._logger, "stream.start", self.ctx, phase="start")
        try:
            yield from self._stream()
        except GeneratorExit:
            # Caller stopped iterating before a terminal state was reached.
            if not self.state.terminal:
                self._finish(StreamState.CANCELLED, reason="abandoned")
            raise
        except Exception as exc:
            if not self.state.terminal:
                self._fail(_as_client_error(exc))
            raise
        finally:
            self._release()

    def abandon(self) -> None:
        """Mark a never-started stream as cancelled."""
        if self.state is StreamState.IDLE:
            self._finish(StreamState.CANCELLED, reason="abandoned")

    def _stream(self) -> Iterator[T]:
        if self._token.cancelled:
            self._finish(StreamState.CANCELLED, reason=self._token.reason)
            return

        self.state = StreamState.OPENING
        try:
            response = self._opener(self._token)
        except CancelledError as exc:
            self._finish(StreamState.CANCELLED, reason=str(exc))
            return
        except ClientError as exc:
            self._fail(exc)
            raise
        self._response = response
        self._unregister = self._token.register(lambda: interrupt_read(response))
        self.state = StreamState.STREAMING
        normalized_log_event(
            self._logger,
            "stream.open",
            self.ctx,
            phase="open",
            status=response.status_code,
            content_type=response.headers.get("content-type"),
        )

        lines = response.iter_lines()
        while True:
            if self._token.cancelled:
                self._finish(StreamState.CANCELLED, reason=self._token.reason)
                return
            try:
                line = next(lines)
            except StopIteration:
                if self._token.cancelled:
                    # An interrupted read can look like a clean end of body.
                    self._finish(StreamState.CANCELLED, reason=self._token.reason)
                else:
                    self._finish(StreamState.DONE, reason="eof")
                return
            except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
                if self._token.cancelled:
                    self._finish(StreamState.CANCELLED, reason=self._token.reason)
                    return
                err = TransportError(None, str(exc) or exc.__class__.__name__, raw=exc)
                self._fail(err)
                raise err from exc

            payload = extract_payload(line)
            if not payload:
                self.metrics.skipped += 1
                continue
            if is_sentinel(payload):
                self._finish(StreamState.DONE, reason="sentinel")
                return
            try:
                chunk = self._decoder(payload)
            except DecodeError as exc:
                self._fail(exc)
                raise
            except Exception as exc:
                err = DecodeError(payload, f"{exc.__class__.__name__}: {exc}", raw=exc)
                self._fail(err)
                raise err from exc
            self.metrics.record_emit(self._elapsed_ms())
            yield chunk

    # Terminal transitions ------------------------------------------------
    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self._t0) * 1000.0

    def _finish(self, state: StreamState, *, reason: Optional[str] = None) -> None:
        self.state = state
        self._token.detach()
        self.metrics.total_duration_ms = round(self._elapsed_ms(), 3)
        self._release()
        normalized_log_event(
            self._logger,
            "stream.cancelled" if state is StreamState.CANCELLED else "stream.end",
            self.ctx,
            phase="finalize",
            outcome=state.value,
            emitted=self.metrics.emitted,
            reason=reason,
            **self.metrics.as_log_fields(),
        )

    def _fail(self, exc: ClientError) -> None:
        self.state = StreamState.FAILED
        self._token.detach()
        self.error = exc
        self.metrics.total_duration_ms = round(self._elapsed_ms(), 3)
        self._release()
        fields = self.metrics.as_log_fields()
        if isinstance(exc, TransportError):
            fields["status"] = exc.status
        if isinstance(exc, DecodeError):
            fields["payload_length"] = len(exc.payload)
        normalized_log_event(
            self._logger,
            "stream.error",
            self.ctx,
            phase="finalize",
            outcome=StreamState.FAILED.value,
            error_code=exc.code.value,
            emitted=self.metrics.emitted,
            level=logging.WARNING,
            error=exc.message,
            **fields,
        )

    def _release(self) -> None:
        """Close the response once; later calls are no-ops."""
        with self._lock:
            if self._released or self._response is None:
                return
            self._released = True
            response = self._response
            unregister = self._unregister
        if unregister is not None:
            unregister()
        response.close()


__all__ = ["SSEStreamDriver", "Opener", "Decoder"]
