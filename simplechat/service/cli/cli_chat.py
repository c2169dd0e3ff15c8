"""Interactive chat loop.

Purpose
-------
Keep a running conversation with the chat endpoint: read a prompt, stream
the reply to the terminal as it arrives, and append both turns to the
history so the next prompt continues the same conversation.

Behavior
--------
- The history starts with one system message.
- A blank prompt (or end of input) leaves the loop.
- Each reply gets a fresh cancellation token. ``interrupt()`` (wired to
  Ctrl+C by ``main``) cancels the reply in flight; the partial text is kept
  in the history and ``[Cancelled]`` is printed after it.
- A failed reply is reported on stderr and its prompt is dropped from the
  history; the loop continues.
"""

from __future__ import annotations

import sys
import threading
from typing import Callable, List, Optional, TextIO

from ...base.cancellation import CancellationToken
from ...base.dto import ChatMessage, ChatRole
from ...base.errors import ClientError
from ...base.streaming import ChatAccumulator
from ...openai import OpenAIClient
from .cli_utils import suppress_console_logs

PROMPT = "Prompt (leave blank to quit): "
REPLY_HEADER = "GPT (Ctrl+C to interrupt response):"
CANCELLED_MARK = " [Cancelled]"


def _read_prompt(input_fn: Callable[[str], str]) -> str:
    """Read one prompt; end of input reads as a blank line."""
    try:
        return input_fn(PROMPT)
    except EOFError:
        return ""


class ChatSession:
    """Holds the conversation and runs one streamed reply per prompt.

    Parameters
    ----------
    client: OpenAIClient
        Client used for every reply.
    system: str
        Content of the opening system message.
    temperature: float
        Sampling temperature sent with every request.
    out, err: TextIO
        Streams for reply text and error reports.
    """

    def __init__(
        self,
        client: OpenAIClient,
        *,
        system: str,
        temperature: float,
        out: TextIO = sys.stdout,
        err: TextIO = sys.stderr,
    ) -> None:
        self.client = client
        self.temperature = temperature
        self.out = out
        self.err = err
        self.history: List[ChatMessage] = [ChatMessage(role=ChatRole.SYSTEM, content=system)]
        self._token: Optional[CancellationToken] = None
        self._lock = threading.Lock()

    def interrupt(self) -> bool:
        """Cancel the reply in flight; return ``False`` when nothing was streaming."""
        with self._lock:
            token = self._token
        if token is None:
            return False
        token.cancel("interrupted")
        return True

    def ask(self, prompt: str) -> Optional[ChatMessage]:
        """Send ``prompt``, stream the reply and record both turns.

        Returns the assistant message appended to the history, or ``None``
        when the request failed.
        """
        self.history.append(ChatMessage(role=ChatRole.USER, content=prompt))
        print(REPLY_HEADER, file=self.out)
        token = CancellationToken()
        with self._lock:
            self._token = token
        acc = ChatAccumulator()
        try:
            with suppress_console_logs():
                with self.client.create_chat_completion(
                    self.history, temperature=self.temperature, token=token
                ) as stream:
                    for chunk in stream:
                        fragment = acc.add(chunk)
                        if fragment:
                            self.out.write(fragment)
                            self.out.flush()
        except ClientError as exc:
            self.history.pop()
            print(f"\n[Error] {exc}", file=self.err)
            print(file=self.out)
            return None
        finally:
            with self._lock:
                self._token = None

        reply = acc.to_message()
        self.history.append(reply)
        if token.cancelled:
            self.out.write(CANCELLED_MARK)
        self.out.write("\n\n")
        self.out.flush()
        return reply

    def run(self, input_fn: Callable[[str], str] = input) -> int:
        """Loop until a blank prompt; return the process exit code."""
        while True:
            prompt = _read_prompt(input_fn)
            if not prompt.strip():
                return 0
            self.ask(prompt)


__all__ = ["ChatSession", "PROMPT", "REPLY_HEADER", "CANCELLED_MARK"]
