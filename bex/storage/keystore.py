"""Host keystore adapter backed by a local SQLite key/value table.

Plays the role of the platform-provided store that desktop and launcher
front ends use as their fast primary storage. The connection is shared
across worker threads and guarded by a lock; blocking calls are moved off
the event loop with :func:`asyncio.to_thread`.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any

from .adapter import decode_stored_value, ensure_str
from .json_file import DEFAULT_DATA_DIR, DIR_MODE

logger = logging.getLogger(__name__)

DEFAULT_KEYSTORE_FILE = DEFAULT_DATA_DIR / "keystore.db"


class KeystoreStorage:
    """Adapter storing each key as one row of a SQLite table.

    Parameters
    ----------
    db_path:
        Path to the database file, or ``":memory:"``. Parent directories are
        created automatically.
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        if db_path is None:
            db_path = DEFAULT_KEYSTORE_FILE
        self._db_path = str(db_path)
        self._lock = threading.Lock()

        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)

        self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS items (
                key    TEXT PRIMARY KEY,
                value  TEXT NOT NULL
            )
            """
        )
        self._conn.commit()

    # -- blocking helpers ----------------------------------------------------

    def _get(self, key: str) -> str | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT value FROM items WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row is not None else None

    def _set(self, key: str, value: str) -> None:
        with self._lock:
            self._conn.execute(
                "INSERT OR REPLACE INTO items (key, value) VALUES (?, ?)",
                (key, value),
            )
            self._conn.commit()

    def _remove(self, key: str) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM items WHERE key = ?", (key,))
            self._conn.commit()

    def _keys(self) -> list[str]:
        with self._lock:
            rows = self._conn.execute("SELECT key FROM items ORDER BY rowid").fetchall()
        return [row[0] for row in rows]

    # -- StorageAdapter ------------------------------------------------------

    async def get_item(self, key: str) -> Any | None:
        try:
            raw = await asyncio.to_thread(self._get, key)
        except sqlite3.Error as exc:
            logger.debug("Keystore read failed for '%s': %s", key, exc)
            return None
        return decode_stored_value(raw)

    async def set_item(self, key: str, value: str) -> None:
        value = ensure_str(key, value)
        await asyncio.to_thread(self._set, key, value)

    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)

    async def get_all_keys(self) -> list[str]:
        try:
            return await asyncio.to_thread(self._keys)
        except sqlite3.Error as exc:
            logger.debug("Keystore key listing failed: %s", exc)
            return []

    def close(self) -> None:
        """Close the underlying sqlite3 connection."""
        self._conn.close()

    def __repr__(self) -> str:
        return f"KeystoreStorage(db_path={self._db_path!r})"
