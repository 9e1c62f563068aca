from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

WIN = "W"
LOSS = "L"


@dataclass(frozen=True, slots=True)
class HeadToHead:
    wins: int = 0
    losses: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses


def _record(wins: int, losses: int) -> str:
    return f"{wins}-{losses}"


def _pct(wins: int, losses: int) -> float:
    gp = wins + losses
    return wins / gp if gp else 0.0


@dataclass(frozen=True, slots=True)
class TeamStanding:
    """Cumulative record for one team. Built by the aggregator; never mutated."""

    team_code: str
    team_id: Optional[int] = None
    team_city: str = ""
    team_name: str = ""
    conference: Optional[str] = None
    division: Optional[str] = None

    wins: int = 0
    losses: int = 0
    home_wins: int = 0
    home_losses: int = 0
    away_wins: int = 0
    away_losses: int = 0
    neutral_wins: int = 0
    neutral_losses: int = 0
    conf_wins: int = 0
    conf_losses: int = 0
    div_wins: int = 0
    div_losses: int = 0
    points_for: int = 0
    points_against: int = 0

    results: Tuple[str, ...] = ()
    head_to_head: Mapping[str, HeadToHead] = field(default_factory=dict)
    last_game_at: Optional[_dt.datetime] = None

    # Filled by ranking.
    rank: Optional[int] = None
    games_behind: Optional[float] = None

    @property
    def games_played(self) -> int:
        return self.wins + self.losses

    @property
    def win_pct(self) -> float:
        return _pct(self.wins, self.losses)

    @property
    def conf_win_pct(self) -> float:
        return _pct(self.conf_wins, self.conf_losses)

    @property
    def div_win_pct(self) -> float:
        return _pct(self.div_wins, self.div_losses)

    @property
    def point_diff(self) -> int:
        return self.points_for - self.points_against

    @property
    def streak(self) -> str:
        if not self.results:
            return "-"
        last = self.results[-1]
        count = 1
        for result in reversed(self.results[:-1]):
            if result != last:
                break
            count += 1
        return f"{last} {count}"

    def last_n(self, n: int = 10) -> str:
        sample = self.results[-n:]
        return _record(sample.count(WIN), sample.count(LOSS))

    @property
    def last10(self) -> str:
        return self.last_n(10)

    @property
    def home_record(self) -> str:
        return _record(self.home_wins, self.home_losses)

    @property
    def away_record(self) -> str:
        return _record(self.away_wins, self.away_losses)

    @property
    def neutral_record(self) -> str:
        return _record(self.neutral_wins, self.neutral_losses)

    @property
    def conference_record(self) -> str:
        return _record(self.conf_wins, self.conf_losses)

    @property
    def division_record(self) -> str:
        return _record(self.div_wins, self.div_losses)

    def head_to_head_vs(self, opponent: str) -> HeadToHead:
        return self.head_to_head.get(opponent) or HeadToHead()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_code": self.team_code,
            "team_id": self.team_id,
            "team_city": self.team_city,
            "team_name": self.team_name,
            "conference": self.conference,
            "division": self.division,
            "rank": self.rank,
            "wins": self.wins,
            "losses": self.losses,
            "win_pct": round(self.win_pct, 3),
            "games_behind": self.games_behind,
            "streak": self.streak,
            "last10": self.last10,
            "home_record": self.home_record,
            "away_record": self.away_record,
            "neutral_record": self.neutral_record,
            "conference_record": self.conference_record,
            "division_record": self.division_record,
            "points_for": self.points_for,
            "points_against": self.points_against,
            "point_diff": self.point_diff,
            "head_to_head": {
                opp: {"wins": h2h.wins, "losses": h2h.losses}
                for opp, h2h in sorted(self.head_to_head.items())
            },
            "last_game_at": self.last_game_at.isoformat() if self.last_game_at else None,
        }
