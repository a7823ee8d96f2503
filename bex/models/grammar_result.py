"""Validated result of a grammar check."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

DEFAULT_EXPLANATION = "No explanation provided."


class GrammarResult(BaseModel):
    """Corrected text plus the model's note on what changed."""

    model_config = ConfigDict(frozen=True)

    corrected: str
    explanation: str = DEFAULT_EXPLANATION
