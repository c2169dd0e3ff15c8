"""
Pydantic records for chat completions.

Purpose
-------
Defines the chat message record sent in requests and the chunk shape
decoded from each event of a streamed chat completion.

Role handling
-------------
Roles are a closed enumeration (system, user, assistant) matched
case-insensitively from the wire. An unrecognized role is a validation
failure, which the streaming decoder reports as a ``DecodeError``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .timestamps import UnixTimestamp


class ChatRole(str, Enum):
    """Author of a chat message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

    @classmethod
    def parse(cls, value: str) -> "ChatRole":
        """Return the role named by ``value``, ignoring case and surrounding space.

        Raises:
            ValueError: ``value`` names no known role.
        """
        key = value.strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"unknown chat role: {value!r}")


def _coerce_role(value: Any) -> Any:
    if isinstance(value, ChatRole):
        return value
    if isinstance(value, str):
        return ChatRole.parse(value)
    raise ValueError(f"chat role must be a string, got {type(value).__name__}")


Role = Annotated[ChatRole, BeforeValidator(_coerce_role)]


class ChatMessage(BaseModel):
    """One turn of a conversation.

    Immutable so a history can be shared between calls without copies.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: Optional[str] = None

    def to_wire(self) -> dict[str, Any]:
        return {"role": self.role.value, "content": self.content}


class ChatDelta(BaseModel):
    role: Optional[Role] = None
    content: Optional[str] = None


class ChatChoice(BaseModel):
    delta: ChatDelta = Field(default_factory=ChatDelta)
    index: Optional[int] = None
    finish_reason: Optional[str] = None


class ChatChunk(BaseModel):
    """One decoded event of a streamed chat completion.

    ``choices`` is the only required key; a document without it is not a
    chat chunk.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    object: str = ""
    created: Optional[UnixTimestamp] = None
    model: str = ""
    choices: List[ChatChoice]


__all__ = [
    "ChatRole",
    "Role",
    "ChatMessage",
    "ChatDelta",
    "ChatChoice",
    "ChatChunk",
]
