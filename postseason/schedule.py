from __future__ import annotations

"""Postseason calendar helpers over the game ledger.

- regular_season_end_date: last day with a full league-wide slate
- play_in_pool / playoff_pool / cup_pool: candidate completed games per phase
"""

import datetime as _dt
from collections import Counter
from typing import Iterable, List, Optional

from ledger.types import GameRecord

from .config import DEFAULT_POSTSEASON_CONFIG, PostseasonConfig


def _kickoff_order(games: Iterable[GameRecord]) -> List[GameRecord]:
    return sorted(games, key=lambda g: (g.game_datetime_utc, g.game_id))


def games_per_day(games: Iterable[GameRecord], config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG) -> Counter:
    """Regular-calendar games per day (any status; preseason and series games excluded)."""
    counts: Counter = Counter()
    for g in games:
        if config.labels.is_preseason(g) or g.is_series_game:
            continue
        counts[g.game_day] += 1
    return counts


def regular_season_end_date(
    games: Iterable[GameRecord],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> Optional[_dt.date]:
    """Last calendar day with exactly `regular_season_end_game_count` games, or None."""
    counts = games_per_day(games, config)
    target = int(config.regular_season_end_game_count)
    full_days = [day for day, n in counts.items() if n == target]
    return max(full_days) if full_days else None


def play_in_pool(
    games: Iterable[GameRecord],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> List[GameRecord]:
    """Completed non-series games played strictly after the regular season's last day."""
    games = list(games)
    season_end = regular_season_end_date(games, config)
    if season_end is None:
        return []
    return _kickoff_order(
        g
        for g in games
        if g.is_final
        and not g.is_series_game
        and not config.labels.is_preseason(g)
        and g.game_day > season_end
    )


def playoff_pool(
    games: Iterable[GameRecord],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> List[GameRecord]:
    """Completed elimination-series games in kickoff order."""
    return _kickoff_order(
        g for g in games if g.is_final and g.is_series_game and not config.labels.is_preseason(g)
    )


def cup_knockout_games(
    games: Iterable[GameRecord],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> List[GameRecord]:
    """All cup knockout games (any status) in kickoff order. Group-stage games are excluded."""
    return _kickoff_order(g for g in games if config.labels.cup_round(g) is not None)


def cup_pool(
    games: Iterable[GameRecord],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> List[GameRecord]:
    return [g for g in cup_knockout_games(games, config) if g.is_final]
