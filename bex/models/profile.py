"""Writing profile model."""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Profile(BaseModel):
    """A named block of extra instructions appended to the system prompt.

    Identity is ``id``; updates replace the whole record. ``is_default`` is
    advisory and nothing at the storage layer stops several profiles from
    carrying it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    prompt: str
    is_default: bool | None = Field(default=None, alias="isDefault")

    @classmethod
    def create(cls, name: str, prompt: str, *, is_default: bool = False) -> Profile:
        return cls(id=str(uuid.uuid4()), name=name, prompt=prompt, is_default=is_default)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
