"""Per-call fields merged into every structured log event."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Endpoint and model of a call, plus optional ids and free-form extras.

    ``to_dict`` flattens ``extra`` into the top level and leaves out every
    ``None`` value.
    """

    endpoint: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = {
            "endpoint": self.endpoint,
            "model": self.model,
            "request_id": self.request_id,
            "response_id": self.response_id,
            **self.extra,
        }
        return {k: v for k, v in merged.items() if v is not None}


__all__ = ["LogContext"]
