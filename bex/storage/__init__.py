"""Key/value storage adapters and the stores layered on top of them."""

from __future__ import annotations

from .adapter import StorageAdapter, decode_or_default, decode_stored_value, validate_each
from .history import (
    HISTORY_KEY,
    MAX_HISTORY_ENTRIES,
    clear_history,
    delete_history_entry,
    find_history_entry,
    load_history,
    save_to_history,
)
from .json_file import DEFAULT_DATA_FILE, JsonFileStorage
from .keystore import DEFAULT_KEYSTORE_FILE, KeystoreStorage
from .memory import MemoryStorage
from .mirrored import MirroredStorage
from .profiles import (
    ACTIVE_PROFILE_KEY,
    PROFILES_KEY,
    get_active_profile_id,
    get_default_profile,
    load_profiles,
    remove_profile,
    resolve_active_profile,
    save_profiles,
    set_active_profile_id,
    set_default_profile,
    upsert_profile,
)

__all__ = [
    "ACTIVE_PROFILE_KEY",
    "DEFAULT_DATA_FILE",
    "DEFAULT_KEYSTORE_FILE",
    "HISTORY_KEY",
    "JsonFileStorage",
    "KeystoreStorage",
    "MAX_HISTORY_ENTRIES",
    "MemoryStorage",
    "MirroredStorage",
    "PROFILES_KEY",
    "StorageAdapter",
    "clear_history",
    "decode_or_default",
    "decode_stored_value",
    "delete_history_entry",
    "find_history_entry",
    "get_active_profile_id",
    "get_default_profile",
    "load_history",
    "load_profiles",
    "remove_profile",
    "resolve_active_profile",
    "save_profiles",
    "save_to_history",
    "set_active_profile_id",
    "set_default_profile",
    "upsert_profile",
    "validate_each",
]
