from __future__ import annotations


class LLMProviderError(Exception):
    """Generic failure raised while handling an LLM provider's output."""


class LLMParseError(LLMProviderError):
    """Raised when an LLM response cannot be parsed as a grammar result.

    ``response_text`` holds the start of the offending response to aid
    debugging when the model returns unexpected content.
    """

    SNIPPET_LENGTH = 200

    def __init__(self, message: str, *, response_text: str | None = None) -> None:
        super().__init__(message)
        self.response_text = response_text

    @classmethod
    def from_response(cls, raw: str) -> LLMParseError:
        snippet = raw[: cls.SNIPPET_LENGTH]
        return cls(
            f"Could not parse LLM response as JSON: {snippet}",
            response_text=snippet,
        )
