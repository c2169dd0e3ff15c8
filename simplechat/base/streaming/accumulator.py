"""Rebuild whole messages from streamed chunks.

The driver hands out deltas; callers that keep a conversation history need
the assistant turn as one ``ChatMessage``. ``ChatAccumulator`` follows the
first choice of each chunk, remembers the most recently announced role and
concatenates content fragments in arrival order.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..dto import ChatChunk, ChatMessage, ChatRole, CompletionChunk


class ChatAccumulator:
    """Incrementally assemble one chat message from ``ChatChunk`` deltas."""

    def __init__(self, default_role: ChatRole = ChatRole.ASSISTANT) -> None:
        self._default_role = default_role
        self.role: Optional[ChatRole] = None
        self.finish_reason: Optional[str] = None
        self._parts: List[str] = []

    def add(self, chunk: ChatChunk) -> Optional[str]:
        """Fold ``chunk`` in and return its content fragment (``None`` if it had none)."""
        if not chunk.choices:
            return None
        choice = chunk.choices[0]
        delta = choice.delta
        if delta.role is not None:
            self.role = delta.role
        if choice.finish_reason is not None:
            self.finish_reason = choice.finish_reason
        if delta.content:
            self._parts.append(delta.content)
        return delta.content

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def to_message(self) -> ChatMessage:
        return ChatMessage(role=self.role or self._default_role, content=self.text)


def accumulate_chat_chunks(chunks: Iterable[ChatChunk]) -> ChatMessage:
    """Consume ``chunks`` and return the assembled message."""
    acc = ChatAccumulator()
    for chunk in chunks:
        acc.add(chunk)
    return acc.to_message()


def accumulate_completion_text(chunks: Iterable[CompletionChunk]) -> str:
    """Concatenate the first choice's text of each completion chunk."""
    return "".join(c.choices[0].text for c in chunks if c.choices)


__all__ = ["ChatAccumulator", "accumulate_chat_chunks", "accumulate_completion_text"]
