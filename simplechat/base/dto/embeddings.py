"""Pydantic records for the embeddings endpoint."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class EmbeddingUsage(BaseModel):
    prompt_tokens: int = 0
    total_tokens: int = 0


class EmbeddingVector(BaseModel):
    """Embedding of one input, in input order (``index``)."""

    object: Optional[str] = None
    index: int = 0
    embedding: List[float] = Field(default_factory=list)
    model: Optional[str] = None
    usage: Optional[EmbeddingUsage] = None


class CreateEmbeddingsResponse(BaseModel):
    object: Optional[str] = None
    data: List[EmbeddingVector] = Field(default_factory=list)
    model: Optional[str] = None
    usage: Optional[EmbeddingUsage] = None


__all__ = ["EmbeddingUsage", "EmbeddingVector", "CreateEmbeddingsResponse"]
