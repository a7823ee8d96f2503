"""History record written once per completed grammar check."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .grammar_result import GrammarResult


class HistoryEntry(BaseModel):
    """One completed check.

    Entries are never edited after they are created, only deleted. JSON
    payloads use the camelCase ``profileName`` key shared with the other
    front ends; Python code uses ``profile_name``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    original: str
    corrected: str
    explanation: str
    provider: str
    model: str
    timestamp: str
    profile_name: str | None = Field(default=None, alias="profileName")

    @field_validator("id", mode="before")
    def _require_id(cls, value: object) -> str:
        result = str(value or "").strip()
        if not result:
            raise ValueError("id must not be empty")
        return result

    @classmethod
    def create(
        cls,
        original: str,
        result: GrammarResult,
        *,
        provider: str,
        model: str,
        profile_name: str | None = None,
    ) -> HistoryEntry:
        """Build an entry for a finished check with a fresh id and UTC timestamp."""
        timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        return cls(
            id=str(uuid.uuid4()),
            original=original,
            corrected=result.corrected,
            explanation=result.explanation,
            provider=str(getattr(provider, "value", provider)),
            model=model,
            timestamp=timestamp,
            profile_name=profile_name,
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready mapping stored under the history key."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
