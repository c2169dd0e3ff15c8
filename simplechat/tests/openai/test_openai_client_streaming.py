"""End-to-end streaming tests for ``OpenAIClient`` over a mock transport."""
from __future__ import annotations

import httpx
import pytest

from simplechat.base.cancellation import CancellationToken
from simplechat.base.dto import ChatMessage, ChatRole
from simplechat.base.errors import TransportError
from simplechat.base.streaming import StreamState, accumulate_chat_chunks
from simplechat.tests.helpers import (
    UNIT_API_KEY,
    chat_event,
    completion_event,
    event_stream_response,
    sse_body,
)


def test_completion_request_wire_format(make_client):
    body = sse_body(completion_event("Hello"), "", completion_event(" world"), "", "data: [DONE]")
    client, handler = make_client(lambda req: event_stream_response(body))

    stream = client.create_completion("Say hello")
    assert handler.requests == []  # nosec B101 - lazy until iterated

    texts = [c.choices[0].text for c in stream]
    assert texts == ["Hello", " world"]  # nosec B101
    assert stream.state is StreamState.DONE  # nosec B101

    (request,) = handler.requests
    assert str(request.url) == "https://api.openai.com/v1/completions"  # nosec B101
    assert request.headers["authorization"] == f"Bearer {UNIT_API_KEY}"  # nosec B101
    assert request.headers["accept"] == "text/event-stream"  # nosec B101
    assert handler.last_json == {  # nosec B101
        "model": "text-davinci-003",
        "prompt": ["Say hello"],
        "temperature": 0.0,
        "stream": True,
    }


def test_chat_request_wire_format_and_accumulation(make_client):
    body = sse_body(
        chat_event("", role="assistant"),
        chat_event("Hi"),
        chat_event(" there"),
        chat_event(finish_reason="stop"),
        "data: [DONE]",
    )
    client, handler = make_client(lambda req: event_stream_response(body), chat_model="gpt-4-test")
    history = [
        ChatMessage(role=ChatRole.SYSTEM, content="You are a helpful assistant."),
        {"role": "User", "content": "Hello"},
    ]

    reply = accumulate_chat_chunks(client.create_chat_completion(history, temperature=0.1, stop=["\n\n"]))

    assert reply.role is ChatRole.ASSISTANT and reply.content == "Hi there"  # nosec B101
    assert str(handler.requests[0].url) == "https://api.openai.com/v1/chat/completions"  # nosec B101
    assert handler.last_json == {  # nosec B101
        "model": "gpt-4-test",
        "messages": [
            {"role": "system", "content": "You are a helpful assistant."},
            {"role": "user", "content": "Hello"},
        ],
        "temperature": 0.1,
        "stop": ["\n\n"],
        "stream": True,
    }


def test_unauthorized_stream_is_empty_with_transport_error(make_client):
    client, _ = make_client(lambda req: httpx.Response(401, json={"error": {"message": "bad key"}}))
    stream = client.create_chat_completion([ChatMessage(role=ChatRole.USER, content="hi")])
    with pytest.raises(TransportError) as info:
        list(stream)
    assert info.value.status == 401  # nosec B101
    assert stream.state is StreamState.FAILED and stream.metrics.emitted == 0  # nosec B101


def test_cancelled_caller_token_prevents_request(make_client):
    body = sse_body(completion_event("a"), completion_event("b"), "data: [DONE]")
    client, handler = make_client(lambda req: event_stream_response(body))
    token = CancellationToken()
    token.cancel("before")

    stream = client.create_completion("x", token=token)
    assert list(stream) == [] and stream.cancelled  # nosec B101
    assert handler.requests == []  # nosec B101


def test_stream_cancel_does_not_touch_caller_token(make_client):
    body = sse_body(completion_event("a"), completion_event("b"), "data: [DONE]")
    client, _ = make_client(lambda req: event_stream_response(body))
    token = CancellationToken()

    stream = client.create_completion("x", token=token)
    next(stream)
    stream.cancel("local")
    assert list(stream) == []  # nosec B101
    assert stream.state is StreamState.CANCELLED  # nosec B101
    assert token.cancelled is False  # nosec B101


def test_versioned_root_from_custom_base_url(make_client):
    client, handler = make_client(
        lambda req: event_stream_response(sse_body("data: [DONE]")),
        base_url="http://localhost:8080/",
        api_version="/v2",
    )
    assert list(client.create_completion("x")) == []  # nosec B101
    assert str(handler.requests[0].url) == "http://localhost:8080/v2/completions"  # nosec B101


def test_finished_streams_detach_from_a_reused_caller_token(make_client):
    body = sse_body(completion_event("a"), "data: [DONE]")
    client, _ = make_client(lambda req: event_stream_response(body))
    token = CancellationToken()

    streams = [client.create_completion("x", token=token) for _ in range(3)]
    for stream in streams:
        assert len(list(stream)) == 1  # nosec B101
    assert len(token._children) == 0  # nosec B101
    token.cancel("later")
    assert all(s.state is StreamState.DONE for s in streams)  # nosec B101
