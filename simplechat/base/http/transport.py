"""Transport adapter: the two ways this client talks HTTP.

``open_stream`` issues a POST that asks for an event stream and returns as
soon as the response headers arrive; the body is left unread for the
streaming driver. ``send_request`` is the single-shot request/response path
used by the non-streaming endpoints.

Both check the status the same way: anything outside 2xx becomes a
:class:`TransportError` carrying the status and the server's reason phrase.
Connection-level ``httpx`` failures become a ``TransportError`` without a
status. Nothing is retried here.

``interrupt_read`` wakes a thread blocked reading a streamed body. Closing
the response from another thread does not do that; shutting down the socket
under it does, and the blocked read returns at once.
"""

from __future__ import annotations

import socket
from typing import Any, Mapping, Optional

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import DecodeError, TransportError

EVENT_STREAM = "text/event-stream"
JSON_CONTENT = "application/json"


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    status = response.status_code
    reason = response.reason_phrase
    response.close()
    raise TransportError(status, reason)


def open_stream(
    client: httpx.Client,
    url: str,
    json_body: Mapping[str, Any],
    token: Optional[CancellationToken] = None,
) -> httpx.Response:
    """POST ``json_body`` to ``url`` and return the response with its body unread.

    Raises:
        CancelledError: ``token`` was cancelled before the request was sent, or
            while the request was in flight.
        TransportError: non-success status (response already closed) or a
            connection failure.

    The caller owns the returned response and must close it.
    """
    if token is not None:
        token.raise_if_cancelled()
    request = client.build_request(
        "POST",
        url,
        json=dict(json_body),
        headers={"Accept": EVENT_STREAM, "Content-Type": JSON_CONTENT},
    )
    try:
        response = client.send(request, stream=True)
    except httpx.HTTPError as exc:
        if token is not None and token.cancelled:
            raise CancelledError(token.reason or "operation cancelled") from exc
        raise TransportError(None, str(exc), raw=exc) from exc
    _raise_for_status(response)
    if token is not None and token.cancelled:
        response.close()
        raise CancelledError(token.reason or "operation cancelled")
    return response


def send_request(
    client: httpx.Client,
    method: str,
    url: str,
    json_body: Optional[Mapping[str, Any]] = None,
) -> Any:
    """Send one request, wait for the full body and return the decoded JSON document.

    Raises:
        TransportError: non-success status or a connection failure.
        DecodeError: the body is not valid JSON (the raw body is attached).
    """
    kwargs: dict[str, Any] = {"headers": {"Accept": JSON_CONTENT}}
    if json_body is not None:
        kwargs["json"] = dict(json_body)
    try:
        response = client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        raise TransportError(None, str(exc), raw=exc) from exc
    _raise_for_status(response)
    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(response.text, f"invalid JSON document: {exc}", raw=exc) from exc


def interrupt_read(response: httpx.Response) -> bool:
    """Shut down the socket behind a streamed ``response``.

    Returns ``False`` when the transport exposes no socket (``httpx.MockTransport``
    for one) or the socket is already gone. Safe to call from any thread and
    more than once; the response itself is still closed by its owner.
    """
    stream = response.extensions.get("network_stream")
    get_extra_info = getattr(stream, "get_extra_info", None)
    if get_extra_info is None:
        return False
    sock = get_extra_info("socket")
    if sock is None:
        return False
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        # Already shut down or closed by the peer.
        return False
    return True


__all__ = ["open_stream", "send_request", "interrupt_read", "EVENT_STREAM", "JSON_CONTENT"]
