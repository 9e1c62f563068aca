from __future__ import annotations

"""Typed structures for the postseason subsystem.

Every resolver call builds these from scratch; nothing here is shared between
calls. `to_dict()` produces the JSON shape handed to the display layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class NodeState(str, Enum):
    UNSEEDED = "Unseeded"
    SEEDED = "Seeded"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"


class ResultStatus(str, Enum):
    INCOMPLETE = "incomplete"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    STALE = "stale"


@dataclass(frozen=True, slots=True)
class SeedEntry:
    team_code: str
    seed: int
    conference: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"team_code": self.team_code, "seed": self.seed, "conference": self.conference}


@dataclass(frozen=True, slots=True)
class NodeSpec:
    """Static shape of one bracket slot."""

    node_id: str
    round_index: int
    round_name: str
    conference: str
    # First round: the two seed numbers (or cup matchup key); later rounds: feeder node ids.
    feeders: Optional[Tuple[str, str]] = None
    seed_pair: Optional[Tuple[int, int]] = None
    label: str = ""


@dataclass(frozen=True, slots=True)
class BracketLayout:
    kind: str  # "playoffs" | "cup"
    wins_needed: int
    nodes: Tuple[NodeSpec, ...]

    def rounds(self) -> List[List[NodeSpec]]:
        by_round: Dict[int, List[NodeSpec]] = {}
        for spec in self.nodes:
            by_round.setdefault(spec.round_index, []).append(spec)
        return [by_round[idx] for idx in sorted(by_round)]


@dataclass(slots=True)
class MatchupNode:
    node_id: str
    round_name: str
    conference: str
    feeders: Optional[Tuple[str, str]] = None
    label: str = ""
    state: NodeState = NodeState.UNSEEDED
    entry_a: Optional[SeedEntry] = None
    entry_b: Optional[SeedEntry] = None
    wins_a: int = 0
    wins_b: int = 0
    leading_team: Optional[str] = None
    leading_seed: Optional[int] = None
    winner: Optional[SeedEntry] = None
    game_ids: List[str] = field(default_factory=list)

    @property
    def series(self) -> str:
        return f"{self.wins_a}-{self.wins_b}"

    @property
    def is_resolved(self) -> bool:
        return self.state == NodeState.RESOLVED

    @property
    def team_a(self) -> Optional[str]:
        return self.entry_a.team_code if self.entry_a else None

    @property
    def seed_a(self) -> Optional[int]:
        return self.entry_a.seed if self.entry_a else None

    @property
    def team_b(self) -> Optional[str]:
        return self.entry_b.team_code if self.entry_b else None

    @property
    def seed_b(self) -> Optional[int]:
        return self.entry_b.seed if self.entry_b else None

    def entry_for(self, team_code: Optional[str]) -> Optional[SeedEntry]:
        if team_code is None:
            return None
        if self.entry_a and team_code == self.entry_a.team_code:
            return self.entry_a
        if self.entry_b and team_code == self.entry_b.team_code:
            return self.entry_b
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node_id": self.node_id,
            "round": self.round_name,
            "conference": self.conference,
            "label": self.label,
            "state": self.state.value,
            "feeders": list(self.feeders) if self.feeders else None,
            "team_a": self.team_a,
            "seed_a": self.seed_a,
            "team_b": self.team_b,
            "seed_b": self.seed_b,
            "series": self.series,
            "leading_team": self.leading_team,
            "leading_seed": self.leading_seed,
            "winner": self.winner.team_code if self.winner else None,
            "game_ids": list(self.game_ids),
        }


@dataclass(slots=True)
class BracketRound:
    index: int
    name: str
    matchups: List[MatchupNode] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return bool(self.matchups) and all(m.is_resolved for m in self.matchups)

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "name": self.name, "matchups": [m.to_dict() for m in self.matchups]}


@dataclass(slots=True)
class BracketResult:
    kind: str
    status: ResultStatus
    rounds: List[BracketRound] = field(default_factory=list)
    champion: Optional[SeedEntry] = None
    reason: str = ""

    def node(self, node_id: str) -> Optional[MatchupNode]:
        for rnd in self.rounds:
            for m in rnd.matchups:
                if m.node_id == node_id:
                    return m
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "status": self.status.value,
            "rounds": [r.to_dict() for r in self.rounds],
            "champion": self.champion.to_dict() if self.champion else None,
            "reason": self.reason,
        }


@dataclass(frozen=True, slots=True)
class PlayInResult:
    conference: str
    status: ResultStatus
    seed7: Optional[SeedEntry] = None
    seed8: Optional[SeedEntry] = None
    eliminated: Tuple[str, ...] = ()
    game_ids: Tuple[str, ...] = ()
    reason: str = ""

    @property
    def is_complete(self) -> bool:
        return self.status == ResultStatus.COMPLETE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conference": self.conference,
            "status": self.status.value,
            "seed7": self.seed7.to_dict() if self.seed7 else None,
            "seed8": self.seed8.to_dict() if self.seed8 else None,
            "eliminated": list(self.eliminated),
            "game_ids": list(self.game_ids),
            "reason": self.reason,
        }
