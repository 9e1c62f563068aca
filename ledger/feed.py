from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from snapshot_cache import SnapshotCache

from .loader import load_schedule_payload
from .types import Ledger

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Mapping[str, Any]]

SCHEDULE_KEY = "schedule"
LAST_GOOD_SCHEDULE_KEY = "schedule.last_good"
SEASON_ID_KEY = "season_id.last_good"


class ScheduleFeed:
    """Ledger provider: injected fetch callable + injected cache.

    The fresh snapshot lives under a TTL'd key. The last successfully parsed
    snapshot and season id are kept without expiry and served when a refresh
    fails.
    """

    def __init__(self, fetch: Fetcher, cache: SnapshotCache) -> None:
        self._fetch = fetch
        self._cache = cache

    @property
    def last_season_id(self) -> Optional[str]:
        return self._cache.get(SEASON_ID_KEY)

    def snapshot(self) -> Ledger:
        cached = self._cache.get(SCHEDULE_KEY)
        if cached is not None:
            return cached
        return self.refresh()

    def refresh(self) -> Ledger:
        try:
            ledger = load_schedule_payload(self._fetch())
        except Exception:
            fallback = self._cache.get(LAST_GOOD_SCHEDULE_KEY)
            if fallback is None:
                raise
            logger.warning("schedule refresh failed; serving last known good snapshot", exc_info=True)
            return fallback

        if not ledger.season_id and self.last_season_id:
            ledger = Ledger(games=ledger.games, season_id=self.last_season_id, skipped=ledger.skipped)

        self._cache.set(SCHEDULE_KEY, ledger)
        self._cache.set(LAST_GOOD_SCHEDULE_KEY, ledger, ttl=None)
        if ledger.season_id:
            self._cache.set(SEASON_ID_KEY, ledger.season_id, ttl=None)
        return ledger

    def invalidate(self) -> None:
        self._cache.invalidate(SCHEDULE_KEY)
