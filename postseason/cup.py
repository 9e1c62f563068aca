from __future__ import annotations

"""In-season cup knockout bracket (single games).

Shape: two quarterfinals and one semifinal per conference, then the final.
Quarterfinal participants and every slot's display orientation come from the
external cup seed/position feed; nothing about orientation is derived here
except the feeder-order fallback for slots the feed does not mention.

Matchup keys in the feed: EQF1, EQF2, WQF1, WQF2, ESF, WSF, FINAL
(separators and case are ignored, so 'E-QF-1' works too).
"""

import datetime as _dt
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import game_time
from ledger.loader import load_cup_slots
from ledger.types import GameRecord

from . import ids
from .config import DEFAULT_POSTSEASON_CONFIG, PostseasonConfig
from .models import BracketLayout, BracketResult, NodeSpec, ResultStatus, SeedEntry
from .bracket import resolve_bracket
from .schedule import cup_knockout_games, cup_pool

logger = logging.getLogger(__name__)

_CONF_NAMES = {"E": "east", "W": "west"}
# Default seed numbers per quarterfinal when the feed omits them.
_DEFAULT_QF_SEEDS = {1: (1, 4), 2: (2, 3)}


def normalize_matchup_key(value: str) -> str:
    return re.sub(r"[^A-Z0-9]", "", str(value or "").upper())


@dataclass(frozen=True, slots=True)
class CupSlot:
    matchup: str
    high_seed: str
    low_seed: str
    high_seed_number: Optional[int] = None
    low_seed_number: Optional[int] = None
    high_seed_slot: str = "A"

    @classmethod
    def from_model(cls, model: Any) -> "CupSlot":
        return cls(
            matchup=normalize_matchup_key(model.matchup),
            high_seed=str(model.high_seed).upper(),
            low_seed=str(model.low_seed).upper(),
            high_seed_number=model.high_seed_number,
            low_seed_number=model.low_seed_number,
            high_seed_slot=str(model.high_seed_slot or "A").upper(),
        )

    def orient(self, high: SeedEntry, low: SeedEntry) -> Tuple[SeedEntry, SeedEntry]:
        return (high, low) if self.high_seed_slot == "A" else (low, high)


def cup_slots_from_feed(raw_slots: Sequence[Mapping[str, Any]]) -> List[CupSlot]:
    return [CupSlot.from_model(m) for m in load_cup_slots(raw_slots)]


def build_cup_layout(season_year: int) -> BracketLayout:
    specs: List[NodeSpec] = []
    semis: List[str] = []
    for code, conf in _CONF_NAMES.items():
        qfs = [
            NodeSpec(
                node_id=ids.make_cup_node_id(season_year, conf, "QF", str(n)),
                round_index=0,
                round_name="Quarterfinals",
                conference=conf,
                label=f"{code}QF{n}",
            )
            for n in (1, 2)
        ]
        sf = NodeSpec(
            node_id=ids.make_cup_node_id(season_year, conf, "SF", "1"),
            round_index=1,
            round_name="Semifinals",
            conference=conf,
            feeders=(qfs[0].node_id, qfs[1].node_id),
            label=f"{code}SF",
        )
        specs.extend(qfs)
        specs.append(sf)
        semis.append(sf.node_id)
    specs.append(
        NodeSpec(
            node_id=ids.make_cup_node_id(season_year, "final", "F", "FIN"),
            round_index=2,
            round_name="Championship",
            conference="finals",
            feeders=(semis[0], semis[1]),
            label="FINAL",
        )
    )
    return BracketLayout(kind="cup", wins_needed=1, nodes=tuple(specs))


def cup_reference_date(
    games: Iterable[GameRecord],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> Optional[_dt.date]:
    """Date of the cup championship game, else of the latest knockout game."""
    knockout = cup_knockout_games(games, config)
    if not knockout:
        return None
    finals = [g for g in knockout if config.labels.is_cup_championship(g)]
    return (finals[-1] if finals else knockout[-1]).game_day


def is_cup_stale(
    games: Iterable[GameRecord],
    now: Any,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> bool:
    ref = cup_reference_date(games, config)
    if ref is None:
        return False
    today = game_time.require_utc_timestamp(now).date()
    return game_time.days_between(ref, today) > int(config.cup_stale_days)


def _qf_entrants(
    layout: BracketLayout,
    slots_by_key: Mapping[str, CupSlot],
) -> Tuple[Dict[str, Tuple[SeedEntry, SeedEntry]], List[str]]:
    entrants: Dict[str, Tuple[SeedEntry, SeedEntry]] = {}
    missing: List[str] = []
    for spec in layout.nodes:
        if spec.feeders is not None:
            continue
        slot = slots_by_key.get(spec.label)
        if slot is None:
            missing.append(spec.label)
            continue
        n = int(spec.label[-1])
        default_high, default_low = _DEFAULT_QF_SEEDS.get(n, (1, 2))
        high = SeedEntry(
            team_code=slot.high_seed,
            seed=slot.high_seed_number or default_high,
            conference=spec.conference,
        )
        low = SeedEntry(
            team_code=slot.low_seed,
            seed=slot.low_seed_number or default_low,
            conference=spec.conference,
        )
        entrants[spec.node_id] = slot.orient(high, low)
    return entrants, missing


def resolve_cup(
    games: Sequence[GameRecord],
    slots: Sequence[CupSlot],
    *,
    now: Any,
    season_year: int,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> BracketResult:
    """Resolve the cup bracket.

    - incomplete: the feed does not name all quarterfinal teams
    - stale: the championship (or latest knockout game) is more than
      `cup_stale_days` before `now`; nothing is returned for display
    """
    layout = build_cup_layout(season_year)
    slots_by_key = {normalize_matchup_key(s.matchup): s for s in slots}

    entrants, missing = _qf_entrants(layout, slots_by_key)
    teams = {e.team_code for pair in entrants.values() for e in pair}
    expected = 2 * int(config.cup_teams_per_conference)
    if missing or len(teams) < expected:
        reason = f"quarterfinal teams known: {len(teams)}/{expected}"
        logger.debug("cup incomplete: %s", reason)
        return BracketResult(kind="cup", status=ResultStatus.INCOMPLETE, reason=reason)

    if is_cup_stale(games, now, config):
        ref = cup_reference_date(games, config)
        return BracketResult(
            kind="cup",
            status=ResultStatus.STALE,
            reason=f"cup final dated {ref.isoformat()} is older than {config.cup_stale_days} days",
        )

    def _orient(spec: NodeSpec, first: SeedEntry, second: SeedEntry) -> Tuple[SeedEntry, SeedEntry]:
        slot = slots_by_key.get(spec.label)
        if slot is None:
            return first, second
        by_code = {first.team_code: first, second.team_code: second}
        high = by_code.get(slot.high_seed)
        low = by_code.get(slot.low_seed)
        if high is None or low is None:
            return first, second
        return slot.orient(high, low)

    return resolve_bracket(layout, entrants, cup_pool(games, config), orient=_orient)
