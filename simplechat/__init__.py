"""simplechat package

Client library for an OpenAI-style text generation service with a streaming
decode pipeline at its core.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`OpenAIClient`
    - Streaming: :class:`ChunkStream`, :class:`StreamState`, :class:`ChatAccumulator`
    - Records: :class:`ChatMessage`, :class:`ChatRole`, :class:`ChatChunk`,
      :class:`CompletionChunk` and the non-streaming response shapes
    - Errors: :class:`ClientError`, :class:`TransportError`,
      :class:`DecodeError`, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`

Example::

    from simplechat import ChatMessage, ChatRole, OpenAIClient

    with OpenAIClient() as client:
        history = [ChatMessage(role=ChatRole.USER, content="Hello")]
        for chunk in client.create_chat_completion(history):
            print(chunk.choices[0].delta.content or "", end="")
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ClientError, DecodeError, ErrorCode, TransportError
from .base.dto import (
    ChatChunk,
    ChatMessage,
    ChatRole,
    CompletionChunk,
    CreateEmbeddingsResponse,
    CreateModerationResponse,
    ListModelsResponse,
)
from .base.streaming import ChatAccumulator, ChunkStream, StreamState, accumulate_chat_chunks
from .openai import OpenAIClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "OpenAIClient",
    "ChunkStream",
    "StreamState",
    "ChatAccumulator",
    "accumulate_chat_chunks",
    "ChatMessage",
    "ChatRole",
    "ChatChunk",
    "CompletionChunk",
    "ListModelsResponse",
    "CreateEmbeddingsResponse",
    "CreateModerationResponse",
    "ClientError",
    "TransportError",
    "DecodeError",
    "ErrorCode",
    "CancellationToken",
    "CancelledError",
]
