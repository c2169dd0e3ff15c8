"""Pydantic records for the model listing endpoint."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .timestamps import UnixTimestamp


class ModelPermission(BaseModel):
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[UnixTimestamp] = None
    allow_create_engine: bool = False
    allow_sampling: bool = False
    allow_logprobs: bool = False
    allow_search_indices: bool = False
    allow_view: bool = False
    allow_fine_tuning: bool = False
    organization: Optional[str] = None
    group: Optional[str] = None
    is_blocking: bool = False


class ModelDescriptor(BaseModel):
    """A model the API key can use."""

    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[UnixTimestamp] = None
    owned_by: Optional[str] = None
    permission: List[ModelPermission] = Field(default_factory=list)
    root: Optional[str] = None
    parent: Optional[str] = None


class ListModelsResponse(BaseModel):
    object: Optional[str] = None
    data: List[ModelDescriptor] = Field(default_factory=list)

    def ids(self) -> List[str]:
        """Return the model identifiers in listing order, skipping unnamed entries."""
        return [m.id for m in self.data if m.id]


__all__ = ["ModelPermission", "ModelDescriptor", "ListModelsResponse"]
