from __future__ import annotations

"""Explicit TTL snapshot cache.

Owned and injected by the caller (feed layer). The standings / postseason
engine never touches it.
"""

import datetime as _dt
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import game_time

Clock = Callable[[], _dt.datetime]

_DEFAULT_TTL = object()


@dataclass(slots=True)
class _Entry:
    value: Any
    stored_at: _dt.datetime
    ttl: Optional[_dt.timedelta]

    def expired(self, now: _dt.datetime) -> bool:
        if self.ttl is None:
            return False
        return now - self.stored_at >= self.ttl


class SnapshotCache:
    """Key -> value store with per-entry TTL.

    - get(key): value, or None if missing/expired (expired entries are evicted)
    - set(key, value, ttl=...): ttl=None keeps the entry until invalidated
    - invalidate(key=None): drop one key, or everything
    """

    def __init__(self, default_ttl: Optional[_dt.timedelta] = None, *, clock: Clock = game_time.utc_now) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expired(self._clock()):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: Any, *, ttl: Any = _DEFAULT_TTL) -> None:
        entry_ttl = self._default_ttl if ttl is _DEFAULT_TTL else ttl
        self._entries[key] = _Entry(value=value, stored_at=self._clock(), ttl=entry_ttl)

    def invalidate(self, key: Optional[str] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def age(self, key: str) -> Optional[_dt.timedelta]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        return self._clock() - entry.stored_at

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
