"""Pydantic records for the moderation endpoint.

Several category names contain characters that are not valid Python
identifiers (``self-harm``, ``sexual/minors``); those fields use aliases and
accept either spelling on input.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ModerationCategories(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sexual: Optional[bool] = None
    hate: Optional[bool] = None
    violence: Optional[bool] = None
    self_harm: Optional[bool] = Field(default=None, alias="self-harm")
    sexual_minors: Optional[bool] = Field(default=None, alias="sexual/minors")
    hate_threatening: Optional[bool] = Field(default=None, alias="hate/threatening")
    violence_graphic: Optional[bool] = Field(default=None, alias="violence/graphic")


class ModerationCategoryScores(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sexual: Optional[float] = None
    hate: Optional[float] = None
    violence: Optional[float] = None
    self_harm: Optional[float] = Field(default=None, alias="self-harm")
    sexual_minors: Optional[float] = Field(default=None, alias="sexual/minors")
    hate_threatening: Optional[float] = Field(default=None, alias="hate/threatening")
    violence_graphic: Optional[float] = Field(default=None, alias="violence/graphic")


class ModerationResult(BaseModel):
    flagged: Optional[bool] = None
    categories: Optional[ModerationCategories] = None
    category_scores: Optional[ModerationCategoryScores] = None


class CreateModerationResponse(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    results: List[ModerationResult] = Field(default_factory=list)

    @property
    def flagged(self) -> bool:
        """Whether any input was flagged."""
        return any(r.flagged for r in self.results)


__all__ = [
    "ModerationCategories",
    "ModerationCategoryScores",
    "ModerationResult",
    "CreateModerationResponse",
]
