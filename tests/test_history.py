from __future__ import annotations

import json

import pytest

from bex.models import HistoryEntry
from bex.storage import (
    HISTORY_KEY,
    MAX_HISTORY_ENTRIES,
    JsonFileStorage,
    MemoryStorage,
    clear_history,
    delete_history_entry,
    find_history_entry,
    load_history,
    save_to_history,
)


def make_entry(entry_id: str) -> HistoryEntry:
    return HistoryEntry(
        id=entry_id,
        original=f"original-{entry_id}",
        corrected=f"corrected-{entry_id}",
        explanation="Fixed.",
        provider="openai",
        model="gpt-4.1-mini",
        timestamp="2025-06-01T12:00:00Z",
    )


@pytest.mark.asyncio
async def test_load_history_empty_storage() -> None:
    assert await load_history(MemoryStorage()) == []


@pytest.mark.asyncio
async def test_load_history_parses_stored_json() -> None:
    storage = MemoryStorage()
    entries = [make_entry("1"), make_entry("2")]
    await storage.set_item(HISTORY_KEY, json.dumps([e.to_payload() for e in entries]))
    assert await load_history(storage) == entries


@pytest.mark.asyncio
@pytest.mark.parametrize("stored", ["broken{json", '{"id": "1"}', '[{"id": "1"}]', "42"])
async def test_load_history_corrupt_data_returns_empty(stored: str) -> None:
    storage = MemoryStorage({HISTORY_KEY: stored})
    assert await load_history(storage) == []


@pytest.mark.asyncio
async def test_load_history_accepts_double_encoded_value() -> None:
    payload = json.dumps([make_entry("1").to_payload()])
    storage = MemoryStorage({HISTORY_KEY: json.dumps(payload)})
    assert [e.id for e in await load_history(storage)] == ["1"]


@pytest.mark.asyncio
async def test_save_prepends_newest_first() -> None:
    storage = MemoryStorage()
    await save_to_history(storage, make_entry("1"))
    await save_to_history(storage, make_entry("2"))
    history = await load_history(storage)
    assert [e.id for e in history] == ["2", "1"]


@pytest.mark.asyncio
async def test_history_is_capped_and_evicts_oldest() -> None:
    storage = MemoryStorage()
    seeded = [make_entry(f"e-{i}") for i in range(MAX_HISTORY_ENTRIES)]
    await storage.set_item(HISTORY_KEY, json.dumps([e.to_payload() for e in seeded]))

    await save_to_history(storage, make_entry("new"))
    history = await load_history(storage)

    assert MAX_HISTORY_ENTRIES == 500
    assert len(history) == 500
    assert history[0].id == "new"
    assert history[-1].id == "e-498"
    assert all(e.id != "e-499" for e in history)


@pytest.mark.asyncio
async def test_invalid_entry_is_skipped_without_losing_the_rest() -> None:
    storage = MemoryStorage()
    valid = [make_entry(str(i)).to_payload() for i in range(3)]
    legacy = {key: value for key, value in make_entry("old").to_payload().items() if key != "model"}
    await storage.set_item(HISTORY_KEY, json.dumps([*valid[:2], legacy, valid[2]]))

    assert [e.id for e in await load_history(storage)] == ["0", "1", "2"]

    await save_to_history(storage, make_entry("new"))
    stored = json.loads(storage.snapshot()[HISTORY_KEY])
    assert [item["id"] for item in stored] == ["new", "0", "1", "2"]


@pytest.mark.asyncio
async def test_delete_entry_by_id() -> None:
    storage = MemoryStorage()
    await save_to_history(storage, make_entry("1"))
    await save_to_history(storage, make_entry("2"))
    await delete_history_entry(storage, "1")
    assert [e.id for e in await load_history(storage)] == ["2"]


@pytest.mark.asyncio
async def test_delete_missing_id_is_noop() -> None:
    storage = MemoryStorage()
    await save_to_history(storage, make_entry("1"))
    await delete_history_entry(storage, "nope")
    assert [e.id for e in await load_history(storage)] == ["1"]


@pytest.mark.asyncio
async def test_clear_removes_key() -> None:
    storage = MemoryStorage()
    await save_to_history(storage, make_entry("1"))
    await clear_history(storage)
    assert HISTORY_KEY not in await storage.get_all_keys()
    assert await load_history(storage) == []


@pytest.mark.asyncio
async def test_find_history_entry() -> None:
    storage = MemoryStorage()
    await save_to_history(storage, make_entry("1"))
    assert (await find_history_entry(storage, "1")).corrected == "corrected-1"
    assert await find_history_entry(storage, "2") is None


@pytest.mark.asyncio
async def test_history_round_trip_through_file_store(tmp_path) -> None:
    storage = JsonFileStorage(tmp_path / "data.json")
    entry = make_entry("1").model_copy(update={"profile_name": "Work"})
    await save_to_history(storage, entry)

    document = json.loads((tmp_path / "data.json").read_text(encoding="utf-8"))
    stored = json.loads(document[HISTORY_KEY])
    assert stored[0]["profileName"] == "Work"

    reopened = JsonFileStorage(tmp_path / "data.json")
    assert await load_history(reopened) == [entry]
