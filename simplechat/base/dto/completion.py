"""Pydantic records for legacy (prompt-based) completions."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .timestamps import UnixTimestamp


class CompletionChoice(BaseModel):
    text: str = ""
    index: Optional[int] = None
    finish_reason: Optional[str] = None


class CompletionChunk(BaseModel):
    """One decoded event of a streamed legacy completion."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    object: str = ""
    created: Optional[UnixTimestamp] = None
    model: str = ""
    choices: List[CompletionChoice]


__all__ = ["CompletionChoice", "CompletionChunk"]
