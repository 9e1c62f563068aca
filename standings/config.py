from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from config import TEAM_TO_CONF_DIV
from ledger.labels import DEFAULT_LABEL_RULES, LabelRules


@dataclass(frozen=True, slots=True)
class StandingsConfig:
    labels: LabelRules = DEFAULT_LABEL_RULES
    # Championship of the in-season cup does not count toward the standings.
    exclude_cup_championship: bool = True
    team_table: Mapping[str, Dict[str, str]] = field(default_factory=lambda: TEAM_TO_CONF_DIV)


DEFAULT_STANDINGS_CONFIG = StandingsConfig()
