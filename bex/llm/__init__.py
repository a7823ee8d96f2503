"""Parsing and prompt helpers for grammar-check providers."""

from __future__ import annotations

from .errors import LLMParseError, LLMProviderError
from .json_utils import parse_grammar_response
from .prompts import PROFILE_GENERATION_PROMPT, SYSTEM_PROMPT, build_system_prompt

__all__ = [
    "LLMParseError",
    "LLMProviderError",
    "PROFILE_GENERATION_PROMPT",
    "SYSTEM_PROMPT",
    "build_system_prompt",
    "parse_grammar_response",
]
