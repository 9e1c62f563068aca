"""Standings engine: aggregation of completed games and conference tie-breaks."""

from .aggregator import compute_team_standings, counted_games, has_result, is_counted_game
from .config import DEFAULT_STANDINGS_CONFIG, StandingsConfig
from .tiebreak import compare_standings, division_leaders, rank_conference, sort_conference
from .types import HeadToHead, TeamStanding

__all__ = [
    "DEFAULT_STANDINGS_CONFIG",
    "HeadToHead",
    "StandingsConfig",
    "TeamStanding",
    "compare_standings",
    "compute_team_standings",
    "counted_games",
    "division_leaders",
    "has_result",
    "is_counted_game",
    "rank_conference",
    "sort_conference",
]
