"""Mutable fields behind a ``CancellationToken``; guarded by the token's lock."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass
class State:
    cancelled: bool = False
    reason: Optional[str] = None
    # Cleared when the token is cancelled.
    callbacks: List[Callable[[], None]] = field(default_factory=list)


__all__ = ["State"]
