"""Single-file JSON document storage.

The whole key space lives in one JSON object. It is read lazily into a
process-local cache on first access and rewritten in full on every mutation:

1. build a new mapping (the cached one is never modified in place)
2. serialise it into a uniquely named temporary file in the scratch directory
3. ``os.replace`` the temporary file over the target

A reader therefore only ever sees the previous complete snapshot or the new
one. No cross-process locking is performed; the last replace wins.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from .adapter import decode_stored_value, ensure_str

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".bex"
DEFAULT_DATA_FILE = DEFAULT_DATA_DIR / "data.json"

DIR_MODE = 0o700
FILE_MODE = 0o600


class JsonFileStorage:
    """Adapter persisting every key into one atomically replaced JSON file."""

    def __init__(
        self,
        file_path: str | Path | None = None,
        *,
        scratch_dir: str | Path | None = None,
    ):
        """Initialise the adapter.

        Args:
            file_path: Target document (default ``~/.bex/data.json``).
            scratch_dir: Where temporary snapshots are written. Defaults to the
                target's directory so the final replace never crosses a
                filesystem boundary.
        """
        self.file_path = Path(file_path) if file_path is not None else DEFAULT_DATA_FILE
        self.scratch_dir = Path(scratch_dir) if scratch_dir is not None else None
        self._cache: dict[str, str] | None = None

    # -- loading -------------------------------------------------------------

    def _read_document(self) -> dict[str, str]:
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.debug("Could not load storage file %s: %s", self.file_path, e)
            return {}

        if not isinstance(loaded, dict):
            logger.debug(
                "Storage file %s does not hold a JSON object; starting empty",
                self.file_path,
            )
            return {}
        document: dict[str, str] = {}
        for key, value in loaded.items():
            if not isinstance(value, str):
                logger.debug("Re-encoding non-string value for key %r in %s", key, self.file_path)
                value = json.dumps(value)
            document[str(key)] = value
        return document

    async def _load(self) -> dict[str, str]:
        if self._cache is None:
            self._cache = await asyncio.to_thread(self._read_document)
        return self._cache

    # -- persisting ----------------------------------------------------------

    def _write_document(self, data: dict[str, str]) -> None:
        target_dir = self.file_path.parent
        target_dir.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)

        scratch = self.scratch_dir or target_dir
        scratch.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)

        # mkstemp creates the file with owner-only permissions
        fd, temp_name = tempfile.mkstemp(prefix="bex-", suffix=".json", dir=scratch)
        temp_file = Path(temp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(temp_file, FILE_MODE)
            os.replace(temp_file, self.file_path)
        except OSError:
            if temp_file.exists():
                temp_file.unlink()
            raise

    async def _persist(self, data: dict[str, str]) -> None:
        await asyncio.to_thread(self._write_document, data)
        self._cache = data

    # -- StorageAdapter ------------------------------------------------------

    async def get_item(self, key: str) -> Any | None:
        data = await self._load()
        return decode_stored_value(data.get(key))

    async def set_item(self, key: str, value: str) -> None:
        value = ensure_str(key, value)
        data = await self._load()
        await self._persist({**data, key: value})

    async def remove_item(self, key: str) -> None:
        data = await self._load()
        if key not in data:
            return
        await self._persist({k: v for k, v in data.items() if k != key})

    async def get_all_keys(self) -> list[str]:
        data = await self._load()
        return list(data)

    def invalidate(self) -> None:
        """Drop the cached document so the next access re-reads the file."""
        self._cache = None
