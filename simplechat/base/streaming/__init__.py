"""Streaming package.

Exposes the SSE helpers, typed decoders, the stream driver and its
caller-facing ``ChunkStream`` under a single namespace.
"""

from .sse import DATA_MARKER, DONE_SENTINEL, extract_payload, is_sentinel
from .decoder import decode_chat_chunk, decode_completion_chunk, decode_payload
from .stream_state import StreamState
from .streaming_metrics import StreamMetrics
from .stream_driver import SSEStreamDriver
from .stream_controller import ChunkStream
from .accumulator import ChatAccumulator, accumulate_chat_chunks, accumulate_completion_text

__all__ = [
    "DATA_MARKER",
    "DONE_SENTINEL",
    "extract_payload",
    "is_sentinel",
    "decode_payload",
    "decode_chat_chunk",
    "decode_completion_chunk",
    "StreamState",
    "StreamMetrics",
    "SSEStreamDriver",
    "ChunkStream",
    "ChatAccumulator",
    "accumulate_chat_chunks",
    "accumulate_completion_text",
]
