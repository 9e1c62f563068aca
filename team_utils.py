from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from config import CONFERENCES, conference_key
from ledger.types import GameRecord
from standings import DEFAULT_STANDINGS_CONFIG, StandingsConfig, TeamStanding, compute_team_standings, rank_conference

logger = logging.getLogger(__name__)


def get_conference_standings(
    games: Iterable[GameRecord],
    config: StandingsConfig = DEFAULT_STANDINGS_CONFIG,
) -> Dict[str, List[TeamStanding]]:
    """Return ranked standings grouped by conference ('east' / 'west').

    List position i is seed i+1. Teams missing from the conference table are
    left out (exhibition opponents and the like).
    """
    records = compute_team_standings(games, config)

    grouped: Dict[str, List[TeamStanding]] = {conference_key(c): [] for c in CONFERENCES}
    unknown: List[str] = []
    for code, rec in records.items():
        if not rec.conference:
            unknown.append(code)
            continue
        grouped.setdefault(conference_key(rec.conference), []).append(rec)

    if unknown:
        logger.debug("standings: teams without conference ignored: %s", ",".join(unknown))

    return {conf: rank_conference(rows) for conf, rows in grouped.items()}


def standings_to_dict(standings: Dict[str, List[TeamStanding]]) -> Dict[str, List[Dict[str, Any]]]:
    return {conf: [row.to_dict() for row in rows] for conf, rows in standings.items()}


def get_team_detail(games: Iterable[GameRecord], team_code: str) -> Dict[str, Any]:
    """Return one team's ranked standings row."""
    code = str(team_code).upper()
    for rows in get_conference_standings(games).values():
        for row in rows:
            if row.team_code == code:
                return row.to_dict()
    raise ValueError(f"Team '{code}' not found")
