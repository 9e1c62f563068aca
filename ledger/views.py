from __future__ import annotations

"""Schedule views over a ledger snapshot.

- partition_games: today / finished / scheduled buckets, each in kickoff order
- season_progress: share of the schedule already played, as a percentage

"Now" is always a parameter. "Today" is the UTC calendar day of `now`,
compared against each game's league day.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

import game_time

from .types import GameRecord, GameStatus

# Postponed games are done for this snapshot; they leave the upcoming list.
FINISHED_STATUSES = frozenset({GameStatus.FINAL, GameStatus.POSTPONED})


@dataclass(frozen=True, slots=True)
class GameViews:
    today: Tuple[GameRecord, ...] = ()
    finished: Tuple[GameRecord, ...] = ()
    scheduled: Tuple[GameRecord, ...] = ()

    @property
    def total(self) -> int:
        return len(self.today) + len(self.finished) + len(self.scheduled)


def _kickoff_order(games: List[GameRecord]) -> Tuple[GameRecord, ...]:
    return tuple(sorted(games, key=lambda g: (g.game_datetime_utc, g.game_id)))


def partition_games(games: Iterable[GameRecord], now: Any) -> GameViews:
    """Split games into today's slate (any status), finished and scheduled."""
    today_date = game_time.require_utc_timestamp(now).date()
    today: List[GameRecord] = []
    finished: List[GameRecord] = []
    scheduled: List[GameRecord] = []
    for g in games:
        if g.game_day == today_date:
            today.append(g)
        elif g.status in FINISHED_STATUSES:
            finished.append(g)
        else:
            scheduled.append(g)
    return GameViews(
        today=_kickoff_order(today),
        finished=_kickoff_order(finished),
        scheduled=_kickoff_order(scheduled),
    )


def season_progress(games: Iterable[GameRecord], now: Any) -> float:
    """Percent of the schedule played (0.0..100.0, two decimals).

    Finished games count, plus today's games that are already final. An empty
    schedule is 0.0.
    """
    views = partition_games(games, now)
    if not views.total:
        return 0.0
    done = len(views.finished) + sum(1 for g in views.today if g.is_final)
    return round(done * 100.0 / views.total, 2)
