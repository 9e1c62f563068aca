from __future__ import annotations

"""Standings aggregation: completed games -> per-team cumulative records.

Pure function of its inputs. Every call starts from empty records, so the same
ledger always yields the same standings.
"""

import datetime as _dt
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ledger.types import GameRecord, TeamRef

from .config import DEFAULT_STANDINGS_CONFIG, StandingsConfig
from .types import LOSS, WIN, HeadToHead, TeamStanding

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Acc:
    team_code: str
    team_id: Optional[int] = None
    team_city: str = ""
    team_name: str = ""
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
    results: List[str] = field(default_factory=list)
    h2h: Dict[str, List[int]] = field(default_factory=dict)
    last_game_at: Optional[_dt.datetime] = None

    def absorb_identity(self, ref: TeamRef) -> None:
        if self.team_id is None and ref.team_id is not None:
            self.team_id = ref.team_id
        if not self.team_city and ref.city:
            self.team_city = ref.city
        if not self.team_name and ref.name:
            self.team_name = ref.name


def is_counted_game(game: GameRecord, config: StandingsConfig = DEFAULT_STANDINGS_CONFIG) -> bool:
    """Final, not preseason, not the cup championship."""
    if not game.is_final:
        return False
    if config.labels.is_preseason(game):
        return False
    if config.exclude_cup_championship and config.labels.is_cup_championship(game):
        return False
    return True


def counted_games(games: Iterable[GameRecord], config: StandingsConfig = DEFAULT_STANDINGS_CONFIG) -> List[GameRecord]:
    """Counted games in kickoff order (game id breaks same-minute ties)."""
    selected = [g for g in games if is_counted_game(g, config)]
    return sorted(selected, key=lambda g: (g.game_datetime_utc, g.game_id))


def has_result(game: GameRecord) -> bool:
    # Missing team, non-numeric score or a tie: no result to record.
    return game.has_scores and game.home.tricode != game.away.tricode and game.winner is not None


def _grouping(config: StandingsConfig, code: str, key: str) -> Optional[str]:
    return (config.team_table.get(code) or {}).get(key)


def _fold(
    acc: Dict[str, _Acc],
    game: GameRecord,
    config: StandingsConfig,
) -> None:
    winner = game.winner
    loser = game.loser
    w = acc[winner.tricode]
    l = acc[loser.tricode]

    w.wins += 1
    l.losses += 1

    if game.is_neutral:
        w.neutral_wins += 1
        l.neutral_losses += 1
    else:
        if winner is game.home:
            w.home_wins += 1
            l.away_losses += 1
        else:
            w.away_wins += 1
            l.home_losses += 1

    w_conf = _grouping(config, w.team_code, "conference")
    if w_conf and w_conf == _grouping(config, l.team_code, "conference"):
        w.conf_wins += 1
        l.conf_losses += 1
    w_div = _grouping(config, w.team_code, "division")
    if w_div and w_div == _grouping(config, l.team_code, "division"):
        w.div_wins += 1
        l.div_losses += 1

    w.h2h.setdefault(l.team_code, [0, 0])[0] += 1
    l.h2h.setdefault(w.team_code, [0, 0])[1] += 1

    w.points_for += int(winner.score)
    w.points_against += int(loser.score)
    l.points_for += int(loser.score)
    l.points_against += int(winner.score)

    w.results.append(WIN)
    l.results.append(LOSS)
    w.last_game_at = game.game_datetime_utc
    l.last_game_at = game.game_datetime_utc


def _freeze(a: _Acc, config: StandingsConfig) -> TeamStanding:
    info = config.team_table.get(a.team_code) or {}
    return TeamStanding(
        team_code=a.team_code,
        team_id=a.team_id,
        team_city=a.team_city,
        team_name=a.team_name,
        conference=info.get("conference"),
        division=info.get("division"),
        wins=a.wins,
        losses=a.losses,
        home_wins=a.home_wins,
        home_losses=a.home_losses,
        away_wins=a.away_wins,
        away_losses=a.away_losses,
        neutral_wins=a.neutral_wins,
        neutral_losses=a.neutral_losses,
        conf_wins=a.conf_wins,
        conf_losses=a.conf_losses,
        div_wins=a.div_wins,
        div_losses=a.div_losses,
        points_for=a.points_for,
        points_against=a.points_against,
        results=tuple(a.results),
        head_to_head={opp: HeadToHead(wins=v[0], losses=v[1]) for opp, v in sorted(a.h2h.items())},
        last_game_at=a.last_game_at,
    )


def compute_team_standings(
    games: Iterable[GameRecord],
    config: StandingsConfig = DEFAULT_STANDINGS_CONFIG,
) -> Dict[str, TeamStanding]:
    """Return {tricode: TeamStanding} for every team that appears in any game.

    Teams are seeded before status filtering, so a team with no completed game
    still shows up as 0-0.
    """
    games = list(games)
    acc: Dict[str, _Acc] = {}

    for g in games:
        for ref in (g.home, g.away):
            if ref is None or not ref.tricode:
                continue
            entry = acc.get(ref.tricode)
            if entry is None:
                entry = acc[ref.tricode] = _Acc(team_code=ref.tricode)
            entry.absorb_identity(ref)

    skipped = 0
    for g in counted_games(games, config):
        if not has_result(g):
            skipped += 1
            continue
        _fold(acc, g, config)

    if skipped:
        logger.debug("standings: skipped %d malformed final game(s)", skipped)

    return {code: _freeze(acc[code], config) for code in sorted(acc)}
