"""Wire-level tests for ``open_stream``, ``send_request`` and ``interrupt_read``.

Uses ``httpx.MockTransport`` so the full request (method, headers, body)
can be inspected without a network.
"""
from __future__ import annotations

import json
import socket

import httpx
import pytest

from simplechat.base.cancellation import CancellationToken, CancelledError
from simplechat.base.errors import DecodeError, ErrorCode, TransportError
from simplechat.base.http import EVENT_STREAM, interrupt_read, open_stream, send_request
from simplechat.tests.helpers import RecordingHandler, event_stream_response, sse_body


def _client(handler) -> httpx.Client:
    return httpx.Client(base_url="https://api.example.com/v1/", transport=httpx.MockTransport(handler))


def test_open_stream_sends_event_stream_post_with_json_body():
    handler = RecordingHandler(lambda req: event_stream_response(sse_body("data: [DONE]")))
    with _client(handler) as client:
        response = open_stream(client, "chat/completions", {"model": "gpt-4", "stream": True})
        response.close()

    (request,) = handler.requests
    assert request.method == "POST"  # nosec B101
    assert str(request.url) == "https://api.example.com/v1/chat/completions"  # nosec B101
    assert request.headers["accept"] == EVENT_STREAM  # nosec B101
    assert request.headers["content-type"] == "application/json"  # nosec B101
    assert json.loads(request.content) == {"model": "gpt-4", "stream": True}  # nosec B101


def test_open_stream_non_success_raises_with_status_and_reason():
    handler = RecordingHandler(lambda req: httpx.Response(401, json={"error": "bad key"}))
    with _client(handler) as client, pytest.raises(TransportError) as info:
        open_stream(client, "completions", {})
    assert info.value.status == 401  # nosec B101
    assert info.value.reason == "Unauthorized"  # nosec B101
    assert info.value.code is ErrorCode.AUTH  # nosec B101


def test_open_stream_connection_failure_has_no_status():
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(_refuse) as client, pytest.raises(TransportError) as info:
        open_stream(client, "completions", {})
    assert info.value.status is None  # nosec B101
    assert "connection refused" in info.value.reason  # nosec B101
    assert info.value.code is ErrorCode.TRANSPORT  # nosec B101


def test_open_stream_with_cancelled_token_sends_nothing():
    handler = RecordingHandler(lambda req: event_stream_response(b""))
    token = CancellationToken()
    token.cancel("user")
    with _client(handler) as client, pytest.raises(CancelledError):
        open_stream(client, "completions", {}, token)
    assert handler.requests == []  # nosec B101


def test_send_request_returns_decoded_document():
    handler = RecordingHandler(lambda req: httpx.Response(200, json={"object": "list", "data": []}))
    with _client(handler) as client:
        doc = send_request(client, "GET", "models")
    assert doc == {"object": "list", "data": []}  # nosec B101
    assert handler.requests[0].headers["accept"] == "application/json"  # nosec B101
    assert handler.requests[0].content == b""  # nosec B101


def test_send_request_invalid_json_raises_decode_error_with_body():
    handler = RecordingHandler(lambda req: httpx.Response(200, text="<html>oops</html>"))
    with _client(handler) as client, pytest.raises(DecodeError) as info:
        send_request(client, "POST", "embeddings", {"input": "x"})
    assert info.value.payload == "<html>oops</html>"  # nosec B101


def test_send_request_error_status():
    handler = RecordingHandler(lambda req: httpx.Response(503))
    with _client(handler) as client, pytest.raises(TransportError) as info:
        send_request(client, "GET", "models")
    assert info.value.status == 503 and info.value.code is ErrorCode.UNAVAILABLE  # nosec B101


class _FakeNetworkStream:
    def __init__(self, sock) -> None:
        self._sock = sock

    def get_extra_info(self, name: str):
        return self._sock if name == "socket" else None


def test_interrupt_read_shuts_down_the_socket():
    left, right = socket.socketpair()
    try:
        response = httpx.Response(200, extensions={"network_stream": _FakeNetworkStream(left)})
        assert interrupt_read(response) is True  # nosec B101
        assert left.recv(1) == b""  # nosec B101
    finally:
        left.close()
        right.close()


def test_interrupt_read_without_a_socket_is_a_no_op():
    response = event_stream_response(sse_body("data: [DONE]"))
    assert interrupt_read(response) is False  # nosec B101
