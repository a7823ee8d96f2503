"""Bounded, most-recent-first history of completed grammar checks."""

from __future__ import annotations

import json
from typing import Any

from bex.models import HistoryEntry

from .adapter import StorageAdapter, decode_or_default, validate_each

HISTORY_KEY = "history"
MAX_HISTORY_ENTRIES = 500


def _to_entries(value: Any) -> list[HistoryEntry]:
    return validate_each(value, HistoryEntry, label="history entry")


def _dump(entries: list[HistoryEntry]) -> str:
    return json.dumps([entry.to_payload() for entry in entries])


async def load_history(storage: StorageAdapter) -> list[HistoryEntry]:
    """Return stored entries, newest first; corrupt or missing data yields ``[]``."""
    raw = await storage.get_item(HISTORY_KEY)
    return decode_or_default(raw, _to_entries, list, label=HISTORY_KEY)


async def save_to_history(storage: StorageAdapter, entry: HistoryEntry) -> None:
    """Prepend ``entry`` and drop the oldest entries beyond the cap."""
    entries = await load_history(storage)
    updated = [entry, *entries][:MAX_HISTORY_ENTRIES]
    await storage.set_item(HISTORY_KEY, _dump(updated))


async def delete_history_entry(storage: StorageAdapter, entry_id: str) -> None:
    entries = await load_history(storage)
    updated = [e for e in entries if e.id != entry_id]
    await storage.set_item(HISTORY_KEY, _dump(updated))


async def clear_history(storage: StorageAdapter) -> None:
    """Remove the history key entirely."""
    await storage.remove_item(HISTORY_KEY)


async def find_history_entry(storage: StorageAdapter, entry_id: str) -> HistoryEntry | None:
    for entry in await load_history(storage):
        if entry.id == entry_id:
            return entry
    return None
