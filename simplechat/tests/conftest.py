"""Pytest configuration for the simplechat test suite.

Provides:
- An autouse fixture that isolates every test from the developer's
  environment (API key, config file, ``.env``) and closes pooled clients.
- ``make_client``: an ``OpenAIClient`` factory backed by ``httpx.MockTransport``.
- ``captured_logs``: structured events emitted under the ``simplechat`` logger.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Tuple

import httpx
import pytest

from simplechat.base.http import close_all_clients
from simplechat.base.logging import get_logger
from simplechat.config import CONFIG_FILE_ENV, reset_config_cache
from simplechat.config.env import ENV_FIELD_MAP
from simplechat.openai import OpenAIClient
from simplechat.tests.helpers import UNIT_API_KEY, RecordingHandler


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip client settings from the environment for the duration of a test."""
    for name in ENV_FIELD_MAP.values():
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def make_client() -> Iterator[Callable[..., Tuple[OpenAIClient, RecordingHandler]]]:
    """Return a factory building clients on top of a recording MockTransport.

    Usage::

        client, handler = make_client(lambda req: httpx.Response(200, json={...}))
    """
    created: List[OpenAIClient] = []

    def _factory(respond: Callable[[httpx.Request], httpx.Response], **kwargs: Any):
        handler = RecordingHandler(respond)
        client = OpenAIClient(UNIT_API_KEY, transport=httpx.MockTransport(handler), **kwargs)
        created.append(client)
        return client, handler

    yield _factory
    for client in created:
        client.close()


class LogCapture(logging.Handler):
    """Collect records emitted under the ``simplechat`` logger."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def events(self, name: str | None = None) -> List[Dict[str, Any]]:
        """Return decoded structured payloads, optionally filtered by event name."""
        decoded = [json.loads(m) for m in self.messages]
        return [e for e in decoded if name is None or e.get("event") == name]


@pytest.fixture()
def captured_logs() -> Iterator[LogCapture]:
    base = get_logger()
    previous = base.level
    base.setLevel(logging.DEBUG)
    capture = LogCapture()
    base.addHandler(capture)
    try:
        yield capture
    finally:
        base.removeHandler(capture)
        base.setLevel(previous)
