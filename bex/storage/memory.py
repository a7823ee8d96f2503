from __future__ import annotations

from typing import Any, Mapping

from .adapter import decode_stored_value, ensure_str


class MemoryStorage:
    """Dictionary-backed adapter for tests and throwaway sessions."""

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Any | None:
        return decode_stored_value(self._data.get(key))

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = ensure_str(key, value)

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    async def get_all_keys(self) -> list[str]:
        return list(self._data)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the raw stored strings."""
        return dict(self._data)
