"""Public model exports for the project.

Keep the :mod:`bex` namespace clean: tests and other modules should import
``from bex.models import DiffWord, HistoryEntry``.
"""

from __future__ import annotations

from .diff_word import DiffWord
from .enums import DiffType, LLMProviderName
from .grammar_result import DEFAULT_EXPLANATION, GrammarResult
from .history_entry import HistoryEntry
from .profile import Profile

__all__ = [
    "DEFAULT_EXPLANATION",
    "DiffType",
    "DiffWord",
    "GrammarResult",
    "HistoryEntry",
    "LLMProviderName",
    "Profile",
]
