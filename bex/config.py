"""Runtime configuration for the bex front ends.

Settings come from the environment (optionally seeded from a ``.env`` file)
and can be overridden by explicit values, typically parsed CLI arguments.

Environment variables:
    BEX_DATA_FILE: JSON document used by the file backend.
    BEX_KEYSTORE_FILE: SQLite database used by the keystore backend.
    BEX_STORAGE_BACKEND: ``file`` (default), ``keystore`` or ``mirrored``.
    BEX_LOG_LEVEL: Logging level name (default ``WARNING``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv

from .storage import (
    DEFAULT_DATA_FILE,
    DEFAULT_KEYSTORE_FILE,
    JsonFileStorage,
    KeystoreStorage,
    MirroredStorage,
    StorageAdapter,
)

STORAGE_BACKENDS = ("file", "keystore", "mirrored")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class BexConfiguration:
    """Resolved settings shared by the CLI and other front ends."""

    data_file: Path = DEFAULT_DATA_FILE
    keystore_file: Path = DEFAULT_KEYSTORE_FILE
    backend: str = "file"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.data_file = Path(self.data_file).expanduser()
        self.keystore_file = Path(self.keystore_file).expanduser()
        self.backend = self.backend.strip().lower()
        self.log_level = self.log_level.strip().upper()
        if self.backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend '{self.backend}' "
                f"(expected one of: {', '.join(STORAGE_BACKENDS)})"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{self.log_level}'")

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def load_configuration(
    dotenv_path: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> BexConfiguration:
    """Build a :class:`BexConfiguration` from the environment.

    Args:
        dotenv_path: Optional ``.env`` file. Its values take precedence over
            variables already present in the environment.
        overrides: Explicit values (e.g. from the command line); ``None``
            entries are ignored.

    Raises:
        ValueError: If the backend or log level is not recognised.
    """
    if dotenv_path is not None:
        load_dotenv(dotenv_path=str(dotenv_path), override=True)

    values: dict[str, Any] = {}
    env_map = {
        "data_file": "BEX_DATA_FILE",
        "keystore_file": "BEX_KEYSTORE_FILE",
        "backend": "BEX_STORAGE_BACKEND",
        "log_level": "BEX_LOG_LEVEL",
    }
    for field_name, env_name in env_map.items():
        raw = os.environ.get(env_name)
        if raw and raw.strip():
            values[field_name] = raw.strip()

    for field_name, value in (overrides or {}).items():
        if value is not None:
            values[field_name] = value

    return BexConfiguration(**values)


def create_storage(config: BexConfiguration) -> StorageAdapter:
    """Instantiate the storage adapter selected by ``config.backend``."""
    if config.backend == "keystore":
        return KeystoreStorage(config.keystore_file)
    if config.backend == "mirrored":
        return MirroredStorage(
            primary=KeystoreStorage(config.keystore_file),
            mirror=JsonFileStorage(config.data_file),
        )
    return JsonFileStorage(config.data_file)
