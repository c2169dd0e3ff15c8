"""Streaming metrics data structures.

Collected by the stream driver and emitted with the terminal ``stream.end``
log event.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single streaming call.

    Attributes:
        emitted: Number of decoded chunks handed to the caller.
        skipped: Number of lines that carried no payload.
        time_to_first_chunk_ms: Milliseconds from start to the first emitted chunk.
        total_duration_ms: Milliseconds from start to the terminal state.
    """

    emitted: int = 0
    skipped: int = 0
    time_to_first_chunk_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None

    def record_emit(self, elapsed_ms: float) -> None:
        if self.time_to_first_chunk_ms is None:
            self.time_to_first_chunk_ms = round(elapsed_ms, 3)
        self.emitted += 1

    def as_log_fields(self) -> Dict[str, Any]:
        return {
            "emitted_count": self.emitted,
            "skipped_count": self.skipped,
            "time_to_first_chunk_ms": self.time_to_first_chunk_ms,
            "total_duration_ms": self.total_duration_ms,
        }


__all__ = ["StreamMetrics"]
