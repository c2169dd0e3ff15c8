"""Typed request and response records.

Response shapes are Pydantic models decoded straight from the service's JSON
documents; unknown keys are ignored. ``StreamRequest`` is a frozen dataclass
describing one streaming call.
"""

from .timestamps import UnixTimestamp, from_unix_seconds, to_unix_seconds
from .chat import ChatChoice, ChatChunk, ChatDelta, ChatMessage, ChatRole
from .completion import CompletionChoice, CompletionChunk
from .models import ListModelsResponse, ModelDescriptor, ModelPermission
from .embeddings import CreateEmbeddingsResponse, EmbeddingUsage, EmbeddingVector
from .moderation import (
    CreateModerationResponse,
    ModerationCategories,
    ModerationCategoryScores,
    ModerationResult,
)
from .stream_request import StreamRequest, StreamInput

__all__ = [
    "UnixTimestamp",
    "from_unix_seconds",
    "to_unix_seconds",
    "ChatChoice",
    "ChatChunk",
    "ChatDelta",
    "ChatMessage",
    "ChatRole",
    "CompletionChoice",
    "CompletionChunk",
    "ListModelsResponse",
    "ModelDescriptor",
    "ModelPermission",
    "CreateEmbeddingsResponse",
    "EmbeddingUsage",
    "EmbeddingVector",
    "CreateModerationResponse",
    "ModerationCategories",
    "ModerationCategoryScores",
    "ModerationResult",
    "StreamRequest",
    "StreamInput",
]
