from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .types import GameRecord


@dataclass(frozen=True, slots=True)
class LabelRules:
    """How feed labels classify a game. Matching is case-insensitive."""

    preseason_label: str = "Preseason"
    cup_keyword: str = "Cup"
    cup_quarterfinal_prefix: str = "Quarterfinal"
    cup_semifinal_prefix: str = "Semifinal"
    cup_championship_prefixes: Tuple[str, ...] = ("Championship", "Final")

    def is_preseason(self, game: GameRecord) -> bool:
        return game.game_label.strip().lower() == self.preseason_label.lower()

    def is_cup_game(self, game: GameRecord) -> bool:
        return self.cup_keyword.lower() in game.game_label.lower()

    def cup_round(self, game: GameRecord) -> Optional[str]:
        """'QF' / 'SF' / 'F' for cup knockout games, None otherwise (incl. group games)."""
        if not self.is_cup_game(game):
            return None
        sub = game.game_sub_label.strip().lower()
        if sub.startswith(self.cup_quarterfinal_prefix.lower()):
            return "QF"
        if sub.startswith(self.cup_semifinal_prefix.lower()):
            return "SF"
        if any(sub.startswith(p.lower()) for p in self.cup_championship_prefixes):
            return "F"
        return None

    def is_cup_championship(self, game: GameRecord) -> bool:
        return self.cup_round(game) == "F"


DEFAULT_LABEL_RULES = LabelRules()
