"""Storage contract shared by every front end.

A ``StorageAdapter`` is an asynchronous map of string keys to string values.
Values are conventionally JSON documents serialised by the caller; reads hand
back the decoded value, or the raw string when it is not valid JSON.

Two error policies apply to everything built on this contract:

* reads never raise; anything that cannot be loaded or decoded is treated as
  absent (see :func:`decode_or_default`)
* writes always raise, so callers know when a save did not happen
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@runtime_checkable
class StorageAdapter(Protocol):
    """Uniform key/value storage used by the history and profile stores."""

    async def get_item(self, key: str) -> Any | None:
        """Return the decoded value for ``key`` or ``None`` when absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store ``value`` verbatim under ``key``."""
        ...

    async def remove_item(self, key: str) -> None:
        """Delete ``key``; a missing key is not an error."""
        ...

    async def get_all_keys(self) -> list[str]:
        ...


def decode_stored_value(value: str | None) -> Any | None:
    """Decode a stored string as JSON, falling back to the raw string.

    Plain-string values written by older front ends are returned unchanged.
    """
    if value is None:
        return None
    try:
        return json.loads(value)
    except (ValueError, RecursionError):
        return value


def ensure_str(key: str, value: object) -> str:
    """Reject non-string values before they reach a backend."""
    if not isinstance(value, str):
        raise TypeError(
            f"Storage values must be serialised strings; got {type(value).__name__} for '{key}'"
        )
    return value


def decode_or_default(
    value: Any,
    convert: Callable[[Any], T],
    default: Callable[[], T],
    *,
    label: str = "value",
) -> T:
    """Attempt to convert a stored value; on any failure return ``default()``.

    ``value`` may be the already-decoded JSON an adapter returns or a JSON
    string (adapters fall back to raw strings, and some hosts never decode).
    A missing value yields the default without logging.
    """
    if value is None:
        return default()
    try:
        if isinstance(value, str):
            value = json.loads(value)
        return convert(value)
    except Exception as exc:
        logger.debug("Discarding unreadable stored %s: %s", label, exc)
        return default()


def validate_each(value: Any, model: type[M], *, label: str = "item") -> list[M]:
    """Validate every element of a stored JSON array, skipping invalid ones.

    Raises:
        TypeError: If ``value`` is not a list.
    """
    if not isinstance(value, list):
        raise TypeError(f"Expected a JSON array, got {type(value).__name__}")
    items: list[M] = []
    for index, item in enumerate(value):
        try:
            items.append(model.model_validate(item))
        except ValidationError as exc:
            logger.debug("Skipping invalid stored %s at index %d: %s", label, index, exc)
    return items
