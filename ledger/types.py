from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

TeamCode = str  # tricode, e.g. "BOS"


class GameStatus(str, Enum):
    SCHEDULED = "Scheduled"
    LIVE = "Live"
    FINAL = "Final"
    POSTPONED = "Postponed"


@dataclass(frozen=True, slots=True)
class TeamRef:
    tricode: TeamCode
    team_id: Optional[int] = None
    city: str = ""
    name: str = ""
    wins: Optional[int] = None
    losses: Optional[int] = None
    # None when the feed has no usable (numeric) score.
    score: Optional[int] = None


@dataclass(frozen=True, slots=True)
class GameRecord:
    """One schedule entry. Immutable once ingested."""

    game_id: str
    game_datetime_utc: _dt.datetime
    status: GameStatus
    home: Optional[TeamRef]
    away: Optional[TeamRef]
    game_code: str = ""
    # League-local calendar day when the feed provides one (gameDateEst).
    game_date: Optional[_dt.date] = None
    game_label: str = ""
    game_sub_label: str = ""
    series_text: str = ""
    is_neutral: bool = False

    @property
    def game_day(self) -> _dt.date:
        if self.game_date is not None:
            return self.game_date
        return self.game_datetime_utc.date()

    @property
    def is_final(self) -> bool:
        return self.status == GameStatus.FINAL

    @property
    def is_series_game(self) -> bool:
        return bool(self.series_text.strip())

    @property
    def has_teams(self) -> bool:
        return bool(self.home and self.home.tricode and self.away and self.away.tricode)

    @property
    def has_scores(self) -> bool:
        return (
            self.has_teams
            and isinstance(self.home.score, int)
            and isinstance(self.away.score, int)
        )

    @property
    def team_codes(self) -> Tuple[TeamCode, ...]:
        return tuple(t.tricode for t in (self.away, self.home) if t is not None and t.tricode)

    @property
    def team_pair(self) -> str:
        """Compact code pair, e.g. 'CLEGSW' (away + home)."""
        if "/" in self.game_code:
            suffix = self.game_code.split("/", 1)[1].strip().upper()
            if suffix:
                return suffix
        return "".join(self.team_codes).upper()

    def involves(self, code: TeamCode) -> bool:
        return code in self.team_codes

    @property
    def winner(self) -> Optional[TeamRef]:
        if not self.has_scores or self.home.score == self.away.score:
            return None
        return self.home if self.home.score > self.away.score else self.away

    @property
    def loser(self) -> Optional[TeamRef]:
        winner = self.winner
        if winner is None:
            return None
        return self.away if winner is self.home else self.home


@dataclass(frozen=True, slots=True)
class Ledger:
    """An immutable snapshot of the schedule feed."""

    games: Tuple[GameRecord, ...] = ()
    season_id: Optional[str] = None  # e.g. "2025-26"
    skipped: Tuple[str, ...] = field(default=())  # ids of feed entries dropped at parse time

    def __len__(self) -> int:
        return len(self.games)

    def __iter__(self):
        return iter(self.games)
