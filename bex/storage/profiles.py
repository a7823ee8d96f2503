"""Writing profiles and the active-profile pointer.

Nothing here enforces "at most one default profile". The list helpers keep
that property when they are used for every mutation, but stored data written
by other front ends is accepted as-is.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from bex.models import Profile

from .adapter import StorageAdapter, decode_or_default, validate_each

PROFILES_KEY = "profiles"
ACTIVE_PROFILE_KEY = "activeProfile"


def _to_profiles(value: Any) -> list[Profile]:
    return validate_each(value, Profile, label="profile")


async def load_profiles(storage: StorageAdapter) -> list[Profile]:
    raw = await storage.get_item(PROFILES_KEY)
    return decode_or_default(raw, _to_profiles, list, label=PROFILES_KEY)


async def save_profiles(storage: StorageAdapter, profiles: Sequence[Profile]) -> None:
    await storage.set_item(
        PROFILES_KEY, json.dumps([profile.to_payload() for profile in profiles])
    )


async def get_active_profile_id(storage: StorageAdapter) -> str | None:
    """Return the stored active profile id without checking it still exists.

    Ids are stored JSON-encoded. Legacy bare values are decoded by the adapter
    before they get here, so a bare JSON literal is re-serialised and the
    conversion is lossy: ``42`` reads as ``"42"``, ``1e3`` as ``"1000.0"``
    and ``null`` as no active profile.
    """
    value = await storage.get_item(ACTIVE_PROFILE_KEY)
    if value is None:
        return None
    return value if isinstance(value, str) else json.dumps(value)


async def set_active_profile_id(storage: StorageAdapter, profile_id: str) -> None:
    await storage.set_item(ACTIVE_PROFILE_KEY, json.dumps(profile_id))


def get_default_profile(profiles: Sequence[Profile]) -> Profile | None:
    """Return the first profile flagged as default, if any."""
    for profile in profiles:
        if profile.is_default is True:
            return profile
    return None


def upsert_profile(profiles: Sequence[Profile], profile: Profile) -> list[Profile]:
    """Return a new list with ``profile`` replacing its namesake id or appended.

    When ``profile`` is the default, every other profile loses the flag.
    """
    updated: list[Profile] = []
    replaced = False
    for existing in profiles:
        if existing.id == profile.id:
            updated.append(profile)
            replaced = True
        elif profile.is_default and existing.is_default:
            updated.append(existing.model_copy(update={"is_default": False}))
        else:
            updated.append(existing)
    if not replaced:
        updated.append(profile)
    return updated


def remove_profile(profiles: Sequence[Profile], profile_id: str) -> list[Profile]:
    return [p for p in profiles if p.id != profile_id]


def set_default_profile(profiles: Sequence[Profile], profile_id: str) -> list[Profile]:
    """Return a new list where only ``profile_id`` is flagged as default."""
    return [p.model_copy(update={"is_default": p.id == profile_id}) for p in profiles]


async def resolve_active_profile(storage: StorageAdapter) -> Profile | None:
    """Return the active profile, else the default profile, else ``None``."""
    profiles = await load_profiles(storage)
    active_id = await get_active_profile_id(storage)
    if active_id is not None:
        for profile in profiles:
            if profile.id == active_id:
                return profile
    return get_default_profile(profiles)
