from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from ledger.labels import DEFAULT_LABEL_RULES, LabelRules


@dataclass(frozen=True, slots=True)
class PostseasonConfig:
    labels: LabelRules = DEFAULT_LABEL_RULES

    # Regular season ends on the last calendar day with exactly this many games
    # league-wide (30 teams / 82 games: the final day has a full 15-game slate).
    regular_season_end_game_count: int = 15

    # Play-In
    auto_bid_seeds: int = 6
    play_in_ranks: Tuple[int, int, int, int] = (7, 8, 9, 10)

    # Playoffs
    playoff_seeds: int = 8
    series_wins_needed: int = 4
    first_round_pairs: Tuple[Tuple[int, int], ...] = field(default=((1, 8), (4, 5), (3, 6), (2, 7)))

    # In-season cup
    cup_teams_per_conference: int = 4
    cup_stale_days: int = 8


DEFAULT_POSTSEASON_CONFIG = PostseasonConfig()
