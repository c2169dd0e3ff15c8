"""Shared HTTP client pool.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so every call against the same service reuses connections.
    Timeouts derive exclusively from :func:`get_timeout_config`.

Lifecycle & cleanup:
    - Clients are cached by ``base_url``, a ``purpose`` string and a digest of
      the default headers (so two API keys never share a client). The digest
      keeps credentials out of the cache key itself.
    - All clients are closed at interpreter exit via ``atexit``. Tests may also
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import hashlib
import threading
from typing import Dict, Mapping, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str, str], httpx.Client] = {}
_LOCK = threading.RLock()


def _headers_digest(headers: Optional[Mapping[str, str]]) -> str:
    if not headers:
        return ""
    material = "\n".join(f"{k.lower()}:{v}" for k, v in sorted(headers.items()))
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def get_httpx_client(
    base_url: Optional[str],
    purpose: str,
    headers: Optional[Mapping[str, str]] = None,
) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    The first request for a key creates a client configured with timeouts from
    :func:`get_timeout_config`. Subsequent requests reuse the same instance.

    Parameters:
        base_url: Optional API base URL set on the client so callers can use
            relative paths. ``None`` groups clients under a shared key.
        purpose: A short string discriminating separate pools (e.g.,
            "request", "stream").
        headers: Default headers sent with every request (authorization).

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a re-entrant lock.
    """
    key = (base_url, purpose, _headers_digest(headers))
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = get_timeout_config().to_httpx()
        kwargs = {"timeout": timeout, "headers": dict(headers or {})}
        client = httpx.Client(base_url=base_url, **kwargs) if base_url else httpx.Client(**kwargs)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


def _cleanup_at_exit() -> None:
    """atexit hook to ensure clients are closed on interpreter exit."""
    close_all_clients()


atexit.register(_cleanup_at_exit)

__all__ = ["get_httpx_client", "close_all_clients"]
