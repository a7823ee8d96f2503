"""Word diff utilities."""

from __future__ import annotations

from .word_diff import compute_word_diff, diff_stats, diff_to_markdown, reconstruct, tokenize

__all__ = [
    "compute_word_diff",
    "diff_stats",
    "diff_to_markdown",
    "reconstruct",
    "tokenize",
]
