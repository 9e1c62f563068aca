from __future__ import annotations

"""Postseason director: the public entry points.

Each call takes a ledger snapshot (a `Ledger` or any iterable of GameRecord)
and returns fresh result objects. Nothing is cached between calls and "now"
is always a parameter.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ledger.types import GameRecord
from standings import DEFAULT_STANDINGS_CONFIG, StandingsConfig, TeamStanding
from team_utils import get_conference_standings

from . import ids
from .bracket import resolve_playoffs
from .config import DEFAULT_POSTSEASON_CONFIG, PostseasonConfig
from .cup import CupSlot, cup_slots_from_feed, resolve_cup
from .models import BracketResult, PlayInResult, SeedEntry
from .play_in import resolve_play_in
from .schedule import regular_season_end_date
from .seeding import build_playoff_seeds

logger = logging.getLogger(__name__)

CONFERENCE_KEYS = ("east", "west")


@dataclass(slots=True)
class PostseasonSnapshot:
    season_year: int
    standings: Dict[str, List[TeamStanding]] = field(default_factory=dict)
    play_in: Dict[str, PlayInResult] = field(default_factory=dict)
    seeds: Dict[str, Dict[int, SeedEntry]] = field(default_factory=dict)
    playoffs: Optional[BracketResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "season_year": self.season_year,
            "standings": {conf: [r.to_dict() for r in rows] for conf, rows in self.standings.items()},
            "play_in": {conf: r.to_dict() for conf, r in self.play_in.items()},
            "seeds": {
                conf: [entry.to_dict() for _, entry in sorted(seeds.items())]
                for conf, seeds in self.seeds.items()
            },
            "playoffs": self.playoffs.to_dict() if self.playoffs else None,
        }


def infer_season_year(games: Iterable[GameRecord], season_id: Optional[str] = None) -> int:
    """Season start year from the season id, else from game dates (0 if unknown)."""
    year = ids.parse_season_year(season_id)
    if year is None:
        year = ids.season_year_from_dates(g.game_day for g in games)
    if year is None:
        logger.debug("season year unknown; node ids use 0")
        return 0
    return year


def compute_standings(
    games: Iterable[GameRecord],
    config: StandingsConfig = DEFAULT_STANDINGS_CONFIG,
) -> Dict[str, List[TeamStanding]]:
    """Ranked standings per conference; list position i is seed i+1."""
    return get_conference_standings(games, config)


def seeding_standings(
    games: Sequence[GameRecord],
    standings_config: StandingsConfig = DEFAULT_STANDINGS_CONFIG,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> Dict[str, List[TeamStanding]]:
    """Standings as of the regular season's last full day.

    Play-in and series games still count in the displayed records, but ranks
    1..10 are fixed once the postseason starts. Falls back to the whole ledger
    when no season end is detectable.
    """
    end = regular_season_end_date(games, config)
    if end is None:
        return compute_standings(games, standings_config)
    return compute_standings([g for g in games if g.game_day <= end], standings_config)


def resolve_conference_play_in(
    conference: str,
    games: Iterable[GameRecord],
    *,
    standings: Optional[Mapping[str, Sequence[TeamStanding]]] = None,
    standings_config: StandingsConfig = DEFAULT_STANDINGS_CONFIG,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> PlayInResult:
    games = list(games)
    conf = str(conference).strip().lower()
    if conf not in CONFERENCE_KEYS:
        raise ValueError(f"Unknown conference: {conference!r}")
    if standings is None:
        standings = seeding_standings(games, standings_config, config)
    return resolve_play_in(conf, standings.get(conf, []), games, config)


def resolve_postseason(
    source: Iterable[GameRecord],
    *,
    season_year: Optional[int] = None,
    standings_config: StandingsConfig = DEFAULT_STANDINGS_CONFIG,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> PostseasonSnapshot:
    """Standings -> play-in -> seeds -> playoffs bracket, in one pass."""
    games = list(source)
    if season_year is None:
        season_year = infer_season_year(games, getattr(source, "season_id", None))

    standings = compute_standings(games, standings_config)
    seeding = seeding_standings(games, standings_config, config)
    snapshot = PostseasonSnapshot(season_year=season_year, standings=standings)
    for conf in CONFERENCE_KEYS:
        ranked = seeding.get(conf, [])
        play_in = resolve_play_in(conf, ranked, games, config)
        snapshot.play_in[conf] = play_in
        snapshot.seeds[conf] = build_playoff_seeds(ranked, play_in, config)

    snapshot.playoffs = resolve_playoffs(snapshot.seeds, games, season_year=season_year, config=config)
    return snapshot


def resolve_cup_bracket(
    source: Iterable[GameRecord],
    cup_slots: Sequence[Any],
    *,
    now: Any,
    season_year: Optional[int] = None,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> BracketResult:
    """Resolve the cup bracket.

    `cup_slots` is either raw cup feed entries (dicts) or CupSlot objects.
    """
    games = list(source)
    if season_year is None:
        season_year = infer_season_year(games, getattr(source, "season_id", None))
    raw = [s for s in cup_slots if not isinstance(s, CupSlot)]
    slots = [s for s in cup_slots if isinstance(s, CupSlot)] + cup_slots_from_feed(raw)
    return resolve_cup(games, slots, now=now, season_year=season_year, config=config)
