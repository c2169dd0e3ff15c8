"""Cooperative cancellation token.

A token is a one-way latch: once cancelled it stays cancelled and remembers
the first reason given. Streaming code polls it (``cancelled``) and also
registers a callback so the cancelling thread can interrupt a blocked
read itself. Child tokens follow their parent; cancelling a child leaves the
parent alone. A parent holds its children weakly, and a child that is done
can ``detach`` itself early.
"""

from __future__ import annotations

from contextlib import suppress
from threading import Lock
from typing import Callable, List, Optional
from weakref import WeakSet

from .cancelled_error import CancelledError
from .state import State

Callback = Callable[[], None]


def _run_quietly(callbacks: List[Callback]) -> None:
    for callback in callbacks:
        # One failing callback must not stop the rest.
        with suppress(Exception):
            callback()


class CancellationToken:
    """Thread-safe cancellation latch with callbacks and child tokens."""

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: "WeakSet[CancellationToken]" = WeakSet()
        self._parent: Optional[CancellationToken] = parent
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._state.cancelled

    @property
    def reason(self) -> str | None:
        """Reason passed to the first ``cancel`` call, if any."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Latch the token, fire callbacks on this thread, then cancel children.

        Later calls are no-ops.
        """
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            pending, self._state.callbacks = self._state.callbacks, []
            children = tuple(self._children)
        _run_quietly(pending)
        for child in children:
            child.cancel(reason)

    def register(self, callback: Callback) -> Callback:
        """Arrange for ``callback`` to run once on cancellation.

        On an already-cancelled token the callback runs right away. The
        returned function removes the registration and may be called any
        number of times.
        """
        with self._lock:
            fire_now = self._state.cancelled
            if not fire_now:
                self._state.callbacks.append(callback)
        if fire_now:
            _run_quietly([callback])

        def unregister() -> None:
            with self._lock, suppress(ValueError):
                self._state.callbacks.remove(callback)

        return unregister

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Make ``token`` follow this one; it is cancelled at once if this token already is."""
        with self._lock:
            self._children.add(token)
            inherited = self._state.cancelled
        if inherited:
            token.cancel(self._state.reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def unlink_child(self, token: "CancellationToken") -> None:
        with self._lock:
            self._children.discard(token)

    def detach(self) -> None:
        """Stop following the parent token. Safe to call more than once."""
        parent, self._parent = self._parent, None
        if parent is not None:
            parent.unlink_child(self)

    def raise_if_cancelled(self) -> None:
        """Raise :class:`CancelledError` carrying the reason when cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self.reason!r})"


__all__ = ["CancellationToken"]
