from __future__ import annotations

"""Series text normalization.

The feed reports series state from the leader's point of view
("BOS leads 3-1", "MIA wins series 4-2", "Series tied 2-2"). Bracket nodes keep
it as a teamA/teamB-ordered pair, so the record is reversed when the reported
leader is teamB.
"""

import re
from dataclasses import dataclass
from typing import Optional

_LEADER_RX = re.compile(r"^\s*([A-Za-z]{2,4})\s+(?:leads|lead|wins|won)\b\D*(\d+)\s*-\s*(\d+)", re.IGNORECASE)
_TIED_RX = re.compile(r"\btied\b\D*(\d+)\s*-\s*(\d+)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class SeriesScore:
    wins_a: int
    wins_b: int
    leader: Optional[str] = None  # None when tied

    @property
    def text(self) -> str:
        return f"{self.wins_a}-{self.wins_b}"


def normalize_series_text(text: str, team_a: str, team_b: str) -> Optional[SeriesScore]:
    """Parse feed series text into a teamA-ordered score, or None if unusable."""
    if not text:
        return None

    m = _LEADER_RX.search(text)
    if m:
        leader = m.group(1).upper()
        leader_wins, trailer_wins = int(m.group(2)), int(m.group(3))
        if leader == team_a:
            return SeriesScore(wins_a=leader_wins, wins_b=trailer_wins, leader=team_a)
        if leader == team_b:
            return SeriesScore(wins_a=trailer_wins, wins_b=leader_wins, leader=team_b)
        return None

    m = _TIED_RX.search(text)
    if m and m.group(1) == m.group(2):
        wins = int(m.group(1))
        return SeriesScore(wins_a=wins, wins_b=wins, leader=None)
    return None
