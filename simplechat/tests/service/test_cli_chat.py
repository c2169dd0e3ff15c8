"""Tests for the interactive chat loop and the CLI entrypoint.

The loop is driven with scripted input and an in-memory output stream; the
service is replaced by ``httpx.MockTransport``.
"""
from __future__ import annotations

import io
import json
from typing import List

import httpx

from simplechat.base.dto import ChatRole
from simplechat.service.cli import ChatSession, build_parser, main
from simplechat.service.cli.cli_chat import CANCELLED_MARK, PROMPT, REPLY_HEADER
from simplechat.service.cli.cli_utils import parse_verbosity
from simplechat.tests.helpers import chat_event, event_stream_response, sse_body


def _scripted(lines: List[str]):
    feed = iter(lines)
    prompts: List[str] = []

    def _input(prompt: str) -> str:
        prompts.append(prompt)
        return next(feed)

    return _input, prompts


def _reply_body(*parts: str) -> bytes:
    events = [chat_event("", role="assistant")] + [chat_event(p) for p in parts]
    return sse_body(*events, chat_event(finish_reason="stop"), "data: [DONE]")


def test_session_streams_reply_and_keeps_history(make_client):
    client, handler = make_client(lambda req: event_stream_response(_reply_body("Hello", "!")))
    out = io.StringIO()
    session = ChatSession(client, system="You are a helpful assistant.", temperature=0.1, out=out)
    input_fn, prompts = _scripted(["Hi", ""])

    assert session.run(input_fn) == 0  # nosec B101

    assert prompts == [PROMPT, PROMPT]  # nosec B101
    assert out.getvalue() == f"{REPLY_HEADER}\nHello!\n\n"  # nosec B101
    assert [m.role for m in session.history] == [ChatRole.SYSTEM, ChatRole.USER, ChatRole.ASSISTANT]  # nosec B101
    assert session.history[-1].content == "Hello!"  # nosec B101
    sent = json.loads(handler.requests[0].content)
    assert sent["temperature"] == 0.1 and len(sent["messages"]) == 2  # nosec B101


def test_second_turn_sends_whole_conversation(make_client):
    client, handler = make_client(lambda req: event_stream_response(_reply_body("ok")))
    session = ChatSession(client, system="sys", temperature=0.0, out=io.StringIO())

    session.ask("one")
    session.ask("two")

    sent = json.loads(handler.requests[1].content)["messages"]
    assert [m["role"] for m in sent] == ["system", "user", "assistant", "user"]  # nosec B101
    assert sent[2]["content"] == "ok"  # nosec B101


def test_interrupt_marks_reply_cancelled_and_keeps_partial_text(make_client):
    client, _ = make_client(lambda req: event_stream_response(_reply_body("partial", " more")))
    out = io.StringIO()
    session = ChatSession(client, system="sys", temperature=0.0, out=out)

    class _InterruptAfterFirstWrite(io.StringIO):
        def write(self, s: str) -> int:
            if s == "partial":
                session.interrupt()
            return out.write(s)

    session.out = _InterruptAfterFirstWrite()
    reply = session.ask("go")

    assert reply is not None and reply.content == "partial"  # nosec B101
    assert out.getvalue().endswith("partial" + CANCELLED_MARK + "\n\n")  # nosec B101
    assert session.interrupt() is False  # nosec B101 - nothing streaming any more


def test_failed_reply_drops_prompt_and_continues(make_client):
    client, _ = make_client(lambda req: httpx.Response(500))
    err = io.StringIO()
    session = ChatSession(client, system="sys", temperature=0.0, out=io.StringIO(), err=err)

    assert session.ask("hello") is None  # nosec B101
    assert len(session.history) == 1  # nosec B101
    assert "HTTP 500" in err.getvalue()  # nosec B101


def test_end_of_input_leaves_loop(make_client):
    client, _ = make_client(lambda req: event_stream_response(b""))
    session = ChatSession(client, system="sys", temperature=0.0, out=io.StringIO())

    def _eof(prompt: str) -> str:
        raise EOFError

    assert session.run(_eof) == 0  # nosec B101


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.system == "You are a helpful assistant."  # nosec B101
    assert args.temperature == 0.1 and args.model is None  # nosec B101


def test_parse_verbosity_synonyms():
    assert parse_verbosity("verbose") == "DEBUG"  # nosec B101
    assert parse_verbosity("Quiet") == "ERROR"  # nosec B101
    assert parse_verbosity("loud") is None  # nosec B101


def test_main_without_api_key_exits_with_usage_code(capsys):
    assert main(["--verbose", "error"]) == 2  # nosec B101
    assert "OPENAI_API_KEY" in capsys.readouterr().err  # nosec B101


def test_main_rejects_unknown_verbosity(capsys):
    assert main(["--verbose", "loud"]) == 2  # nosec B101
    assert "unknown verbosity" in capsys.readouterr().err  # nosec B101
