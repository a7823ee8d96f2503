"""JSON extraction for grammar-check responses.

Models are asked for a bare JSON object but regularly wrap it in code fences
or surround it with commentary. ``parse_grammar_response`` tries a fixed
sequence of increasingly lenient strategies and returns the first result that
validates:

1. the trimmed text as-is
2. the text with a leading ```` ```json ```` / ```` ``` ```` fence and a
   trailing ```` ``` ```` removed
3. the span from the first ``{`` to the last ``}``

Malformed JSON is never repaired. If none validates, :class:`LLMParseError`
is raised with the start of the response.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Iterator

from bex.models import DEFAULT_EXPLANATION, GrammarResult

from .errors import LLMParseError

logger = logging.getLogger(__name__)

_LEADING_JSON_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_LEADING_FENCE = re.compile(r"^```\s*")
_TRAILING_FENCE = re.compile(r"\s*```\Z")


class _InvalidResult(ValueError):
    """Decoded JSON that does not describe a grammar result."""


def strip_code_fences(text: str) -> str:
    """Remove one leading code fence (optionally tagged ``json``) and a trailing fence."""
    stripped = _LEADING_JSON_FENCE.sub("", text)
    stripped = _LEADING_FENCE.sub("", stripped)
    stripped = _TRAILING_FENCE.sub("", stripped)
    return stripped.strip()


def extract_object_span(text: str) -> str | None:
    """Return the substring from the first ``{`` to the last ``}``, if any."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def validate_result(obj: Any) -> GrammarResult:
    """Turn a decoded JSON value into a :class:`GrammarResult`.

    Raises:
        _InvalidResult: If ``obj`` is not an object with a string ``corrected``.
    """
    if not isinstance(obj, dict):
        raise _InvalidResult(f"Expected a JSON object, got {type(obj).__name__}")
    corrected = obj.get("corrected")
    if not isinstance(corrected, str):
        raise _InvalidResult("Response missing 'corrected' field")

    explanation = obj.get("explanation")
    if not explanation:
        explanation = DEFAULT_EXPLANATION
    elif not isinstance(explanation, str):
        explanation = str(explanation)
    return GrammarResult(corrected=corrected, explanation=explanation)


def _candidates(raw: str) -> Iterator[tuple[str, Callable[[], Any]]]:
    trimmed = raw.strip()
    yield "direct", lambda: json.loads(trimmed)

    stripped = strip_code_fences(trimmed)
    yield "fence-stripped", lambda: json.loads(stripped)

    span = extract_object_span(stripped)
    if span is not None:
        yield "object-span", lambda: json.loads(span)


def parse_grammar_response(raw: str) -> GrammarResult:
    """Parse raw model output into a validated :class:`GrammarResult`.

    Args:
        raw: The response text exactly as the provider returned it.

    Returns:
        The corrected text and explanation. ``explanation`` falls back to
        ``"No explanation provided."`` when the model omitted it.

    Raises:
        LLMParseError: If no strategy produced an object with a string
            ``corrected`` field.

    Example:
        >>> parse_grammar_response('```json\\n{"corrected": "Hi."}\\n```').corrected
        'Hi.'
    """
    if not isinstance(raw, str):
        raise LLMParseError(
            f"Expected string input, got {type(raw).__name__}",
            response_text=None,
        )

    for name, decode in _candidates(raw):
        try:
            return validate_result(decode())
        except (ValueError, TypeError, RecursionError) as exc:
            # json.JSONDecodeError and _InvalidResult are both ValueErrors
            logger.debug("Grammar response strategy '%s' failed: %s", name, exc)

    raise LLMParseError.from_response(raw)
