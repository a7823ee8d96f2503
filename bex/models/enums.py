"""Enumerations shared by the diff, history and profile models."""

from __future__ import annotations

from enum import Enum


class DiffType(str, Enum):
    """How a token relates the original text to the corrected text."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


class LLMProviderName(str, Enum):
    """Providers a front end may route a grammar check to.

    Values are recorded verbatim in history entries.
    """

    OPENAI = "openai"
    CLAUDE = "claude"
    GEMINI = "gemini"
    OLLAMA = "ollama"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]
