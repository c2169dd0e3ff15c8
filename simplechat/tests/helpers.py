"""Shared helpers for building event-stream bodies and mock transports.

Exports:
    - ``UNIT_API_KEY``: fake credential used by every client under test
    - ``sse_body(*lines)``: join lines into a response body
    - ``completion_event`` / ``chat_event``: one ``data:`` line per chunk
    - ``RecordingHandler``: ``httpx.MockTransport`` handler that keeps requests
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import httpx

UNIT_API_KEY = "sk-unit-0123456789"  # pragma: allowlist secret - fake key for tests


def chunk_json(**fields: Any) -> str:
    """Serialize one chunk document on a single line."""
    return json.dumps(fields, separators=(",", ":"))


def sse_body(*lines: str) -> bytes:
    """Join ``lines`` into an event-stream body, one line per entry."""
    return ("\n".join(lines) + "\n").encode("utf-8")


def completion_event(text: str, *, created: int = 1589478378, finish_reason: Optional[str] = None) -> str:
    doc = chunk_json(
        id="cmpl-1",
        object="text_completion",
        created=created,
        model="text-davinci-003",
        choices=[{"text": text, "index": 0, "finish_reason": finish_reason}],
    )
    return f"data: {doc}"


def chat_event(
    content: Optional[str] = None,
    *,
    role: Optional[str] = None,
    finish_reason: Optional[str] = None,
) -> str:
    delta: Dict[str, Any] = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    doc = chunk_json(
        id="chatcmpl-1",
        object="chat.completion.chunk",
        created=1677652288,
        model="gpt-4",
        choices=[{"delta": delta, "index": 0, "finish_reason": finish_reason}],
    )
    return f"data: {doc}"


def event_stream_response(body: bytes, status: int = 200) -> httpx.Response:
    return httpx.Response(status, headers={"content-type": "text/event-stream"}, content=body)


class RecordingHandler:
    """MockTransport handler returning a canned response and recording requests."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)
