from __future__ import annotations

import pytest

from bex.diff import compute_word_diff, diff_stats, diff_to_markdown, reconstruct, tokenize
from bex.models import DiffType, DiffWord


def _join(tokens, *types: DiffType) -> str:
    return "".join(t.text for t in tokens if t.type in types)


def test_tokenize_keeps_whitespace_runs() -> None:
    assert tokenize("a  b\n\tc") == ["a", "  ", "b", "\n\t", "c"]
    assert tokenize(" lead") == [" ", "lead"]
    assert tokenize("") == []


def test_identical_strings_are_all_unchanged() -> None:
    text = "hello world"
    diff = compute_word_diff(text, text)
    assert all(w.type == DiffType.UNCHANGED for w in diff)
    assert "".join(w.text for w in diff) == text


def test_single_word_replacement() -> None:
    diff = compute_word_diff("the cat sat", "the dog sat")
    removed = [w for w in diff if w.type == DiffType.REMOVED]
    added = [w for w in diff if w.type == DiffType.ADDED]
    assert [w.text for w in removed] == ["cat"]
    assert [w.text for w in added] == ["dog"]
    assert diff_to_markdown(diff) == "the ~~cat~~**dog** sat"


def test_removal_precedes_addition_on_ties() -> None:
    diff = compute_word_diff("a", "b")
    assert diff == [
        DiffWord(text="a", type=DiffType.REMOVED),
        DiffWord(text="b", type=DiffType.ADDED),
    ]


def test_detects_added_and_removed_words() -> None:
    added = compute_word_diff("hello world", "hello beautiful world")
    assert any(w.text == "beautiful" and w.type == DiffType.ADDED for w in added)

    removed = compute_word_diff("hello beautiful world", "hello world")
    assert any(w.text == "beautiful" and w.type == DiffType.REMOVED for w in removed)


@pytest.mark.parametrize(
    ("original", "corrected", "expected"),
    [
        ("", "hello", [DiffWord(text="hello", type=DiffType.ADDED)]),
        ("hello", "", [DiffWord(text="hello", type=DiffType.REMOVED)]),
        ("", "", []),
    ],
)
def test_empty_inputs(original: str, corrected: str, expected: list[DiffWord]) -> None:
    assert compute_word_diff(original, corrected) == expected


@pytest.mark.parametrize(
    ("original", "corrected"),
    [
        ("Their going too the store.", "They're going to the store."),
        ("a  b   c", "a b c"),
        ("  leading and trailing  ", "leading and trailing"),
        ("line one\nline two", "line one\n\nline 2"),
        ("same same same", "same"),
    ],
)
def test_both_sides_can_be_reconstructed(original: str, corrected: str) -> None:
    diff = compute_word_diff(original, corrected)
    assert _join(diff, DiffType.UNCHANGED, DiffType.ADDED) == corrected
    assert _join(diff, DiffType.UNCHANGED, DiffType.REMOVED) == original
    assert reconstruct(diff, "corrected") == corrected
    assert reconstruct(diff, "original") == original


def test_reconstruct_rejects_unknown_side() -> None:
    with pytest.raises(ValueError):
        reconstruct([], "middle")  # type: ignore[arg-type]


def test_markdown_groups_consecutive_runs() -> None:
    diff = [
        DiffWord(text="keep", type=DiffType.UNCHANGED),
        DiffWord(text=" ", type=DiffType.UNCHANGED),
        DiffWord(text="old", type=DiffType.REMOVED),
        DiffWord(text=" ", type=DiffType.REMOVED),
        DiffWord(text="words", type=DiffType.REMOVED),
        DiffWord(text="new", type=DiffType.ADDED),
        DiffWord(text=" ", type=DiffType.ADDED),
        DiffWord(text="text", type=DiffType.ADDED),
    ]
    assert diff_to_markdown(diff) == "keep ~~old words~~**new text**"


def test_markdown_of_empty_diff_is_empty() -> None:
    assert diff_to_markdown([]) == ""


def test_diff_stats_ignore_whitespace_tokens() -> None:
    stats = diff_stats(compute_word_diff("the cat sat", "the dog sat down"))
    assert stats == {"unchanged": 2, "added": 2, "removed": 1}


def test_diff_words_are_immutable() -> None:
    word = DiffWord(text="x", type=DiffType.ADDED)
    with pytest.raises(Exception):
        word.text = "y"  # type: ignore[misc]
