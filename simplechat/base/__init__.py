"""
Client Base Package

Exports the endpoint-agnostic building blocks the OpenAI facade is made of:

- Cancellation: cooperative tokens shared with callers
- Errors: ``ErrorCode`` taxonomy and the transport/decode exceptions
- DTOs: pydantic response shapes and the immutable ``StreamRequest``
- Streaming: SSE extraction, typed decoding and the stream driver
- Timeouts: env-driven ``TimeoutConfig``
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ClientError, DecodeError, ErrorCode, TransportError, classify_exception
from .dto import (
    ChatChunk,
    ChatMessage,
    ChatRole,
    CompletionChunk,
    StreamRequest,
)
from .streaming import (
    ChatAccumulator,
    ChunkStream,
    SSEStreamDriver,
    StreamMetrics,
    StreamState,
    extract_payload,
    is_sentinel,
)
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "CancellationToken",
    "CancelledError",
    "ClientError",
    "DecodeError",
    "ErrorCode",
    "TransportError",
    "classify_exception",
    "ChatChunk",
    "ChatMessage",
    "ChatRole",
    "CompletionChunk",
    "StreamRequest",
    "ChatAccumulator",
    "ChunkStream",
    "SSEStreamDriver",
    "StreamMetrics",
    "StreamState",
    "extract_payload",
    "is_sentinel",
    "TimeoutConfig",
    "get_timeout_config",
]
