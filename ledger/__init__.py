"""Game ledger: immutable game records and the feed parsing that produces them."""

from .labels import DEFAULT_LABEL_RULES, LabelRules
from .loader import load_cup_slots, load_games, load_schedule_payload
from .types import GameRecord, GameStatus, Ledger, TeamRef
from .views import GameViews, partition_games, season_progress

__all__ = [
    "DEFAULT_LABEL_RULES",
    "GameRecord",
    "GameStatus",
    "GameViews",
    "LabelRules",
    "Ledger",
    "TeamRef",
    "load_cup_slots",
    "load_games",
    "load_schedule_payload",
    "partition_games",
    "season_progress",
]
