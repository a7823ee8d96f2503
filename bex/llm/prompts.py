"""Prompt text handed to providers by the front ends."""

from __future__ import annotations

SYSTEM_PROMPT = """You are a grammar and expression checker for English text.
Given the user's input text, correct any grammar mistakes, improve awkward phrasing, and make the expression more natural while preserving the original meaning and tone.

Respond ONLY with a JSON object in this exact format (no markdown, no code fences):
{"corrected": "<corrected text>", "explanation": "<brief note on what was changed>"}

If the text is already correct, return it unchanged with explanation "No changes needed.\""""

PROFILE_GENERATION_PROMPT = """You are helping a user create a profile for a grammar checker. Based on the user's writing context, generate a concise prompt (2-4 sentences) that will guide the grammar checker to correct text appropriately.

Write the prompt as instructions (e.g., "Keep the tone professional..."). Be specific but not restrictive. Respond with ONLY the prompt text, nothing else."""


def build_system_prompt(profile_prompt: str | None = None) -> str:
    """Append a profile's extra instructions to :data:`SYSTEM_PROMPT`."""
    if not profile_prompt:
        return SYSTEM_PROMPT
    return f"{SYSTEM_PROMPT}\n\nAdditional context from the user:\n{profile_prompt}"
