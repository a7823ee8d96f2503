"""Word-level diff between an original text and its corrected version.

Texts are split into alternating word and whitespace tokens so that joining
tokens back together reproduces the input exactly. Tokens are aligned with a
longest-common-subsequence table and rendered either as ``DiffWord`` records
or as Markdown (``**added**`` / ``~~removed~~``).
"""

from __future__ import annotations

import re
from typing import Iterable, Literal, Sequence

from bex.models import DiffType, DiffWord

_TOKEN_SPLIT = re.compile(r"(\s+)")

_MARKDOWN_WRAPPERS = {
    DiffType.ADDED: "**",
    DiffType.REMOVED: "~~",
}


def tokenize(text: str) -> list[str]:
    """Split ``text`` into word and whitespace runs, dropping empty fragments."""
    return [part for part in _TOKEN_SPLIT.split(text) if part]


def _lcs_table(original: Sequence[str], corrected: Sequence[str]) -> list[list[int]]:
    m = len(original)
    n = len(corrected)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row = dp[i]
        prev = dp[i - 1]
        token = original[i - 1]
        for j in range(1, n + 1):
            if token == corrected[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = max(prev[j], row[j - 1])
    return dp


def compute_word_diff(original: str, corrected: str) -> list[DiffWord]:
    """Align ``original`` against ``corrected`` token by token.

    Args:
        original: Text as the user wrote it.
        corrected: Text returned by the grammar checker.

    Returns:
        Tokens in reading order. Joining ``unchanged`` and ``added`` tokens
        yields ``corrected``; joining ``unchanged`` and ``removed`` tokens
        yields ``original``.
    """
    orig_tokens = tokenize(original)
    corr_tokens = tokenize(corrected)
    dp = _lcs_table(orig_tokens, corr_tokens)

    # Built back to front, reversed at the end.
    stack: list[DiffWord] = []
    i = len(orig_tokens)
    j = len(corr_tokens)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and orig_tokens[i - 1] == corr_tokens[j - 1]:
            stack.append(DiffWord(text=orig_tokens[i - 1], type=DiffType.UNCHANGED))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            # On a tie the addition is emitted first while walking backwards,
            # so it lands after the removal in reading order.
            stack.append(DiffWord(text=corr_tokens[j - 1], type=DiffType.ADDED))
            j -= 1
        else:
            stack.append(DiffWord(text=orig_tokens[i - 1], type=DiffType.REMOVED))
            i -= 1

    stack.reverse()
    return stack


def _group_runs(tokens: Iterable[DiffWord]) -> list[tuple[DiffType, str]]:
    groups: list[tuple[DiffType, str]] = []
    for token in tokens:
        if groups and groups[-1][0] == token.type:
            groups[-1] = (token.type, groups[-1][1] + token.text)
        else:
            groups.append((token.type, token.text))
    return groups


def diff_to_markdown(tokens: Iterable[DiffWord]) -> str:
    """Render a diff as Markdown.

    Consecutive tokens of the same type are merged first so adjacent markers
    never collide (``~~a~~~~b~~`` would not render).
    """
    parts = []
    for diff_type, text in _group_runs(tokens):
        marker = _MARKDOWN_WRAPPERS.get(diff_type)
        parts.append(f"{marker}{text}{marker}" if marker else text)
    return "".join(parts)


def reconstruct(
    tokens: Iterable[DiffWord],
    side: Literal["original", "corrected"] = "corrected",
) -> str:
    """Rebuild one side of the diff from its tokens."""
    if side == "original":
        skipped = DiffType.ADDED
    elif side == "corrected":
        skipped = DiffType.REMOVED
    else:
        raise ValueError(f"Unknown diff side '{side}'")
    return "".join(token.text for token in tokens if token.type != skipped)


def diff_stats(tokens: Iterable[DiffWord]) -> dict[str, int]:
    """Count word tokens per diff type, ignoring whitespace runs."""
    counts = {value: 0 for value in DiffType.all_values()}
    for token in tokens:
        if token.text.strip():
            counts[token.type.value] += 1
    return counts
