"""Token model produced by the word diff."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .enums import DiffType


class DiffWord(BaseModel):
    """A single word or whitespace run tagged with its diff type."""

    model_config = ConfigDict(frozen=True)

    text: str
    type: DiffType
