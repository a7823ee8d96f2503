from __future__ import annotations

import logging
from typing import Any

from .adapter import StorageAdapter

logger = logging.getLogger(__name__)


class MirroredStorage:
    """Dual-write adapter: a fast primary plus a best-effort durable mirror.

    Reads are served by ``primary`` only. Writes and removals must succeed on
    the primary (its errors propagate); the mirror is updated afterwards and
    any failure there is logged and dropped.
    """

    def __init__(self, primary: StorageAdapter, mirror: StorageAdapter):
        self.primary = primary
        self.mirror = mirror

    async def get_item(self, key: str) -> Any | None:
        return await self.primary.get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        await self.primary.set_item(key, value)
        try:
            await self.mirror.set_item(key, value)
        except Exception as exc:
            logger.debug("Mirror write for '%s' failed: %s", key, exc)

    async def remove_item(self, key: str) -> None:
        await self.primary.remove_item(key)
        try:
            await self.mirror.remove_item(key)
        except Exception as exc:
            logger.debug("Mirror removal for '%s' failed: %s", key, exc)

    async def get_all_keys(self) -> list[str]:
        return await self.primary.get_all_keys()

    def close(self) -> None:
        """Close whichever of the wrapped adapters hold open resources."""
        for store in (self.primary, self.mirror):
            close = getattr(store, "close", None)
            if close is not None:
                close()
