from __future__ import annotations

"""Play-In resolution from completed games.

Ranks 7..10 of a conference play three games:
- seven_vs_eight: winner is seed 7, loser goes to the final
- nine_vs_ten: winner goes to the final, loser eliminated
- final: (7v8 loser) vs (9v10 winner), winner is seed 8

Games are matched by team set among completed, non-series games after the
regular season's last full day. Anything short of all three decided games is
reported as incomplete; partial seeds are never published.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ledger.types import GameRecord
from standings.types import TeamStanding

from .config import DEFAULT_POSTSEASON_CONFIG, PostseasonConfig
from .models import PlayInResult, ResultStatus, SeedEntry
from .schedule import play_in_pool
from .seeding import build_postseason_field

logger = logging.getLogger(__name__)


def _find_game(pool: Sequence[GameRecord], team_x: str, team_y: str) -> Optional[GameRecord]:
    wanted = {team_x, team_y}
    for g in pool:
        if set(g.team_codes) == wanted:
            return g
    return None


def _decide(game: GameRecord) -> Optional[Tuple[str, str]]:
    """(winner, loser) by strictly higher final score; None if undecidable."""
    winner = game.winner
    if winner is None:
        return None
    return winner.tricode, game.loser.tricode


def _incomplete(conference: str, reason: str) -> PlayInResult:
    logger.debug("play-in %s incomplete: %s", conference, reason)
    return PlayInResult(conference=conference, status=ResultStatus.INCOMPLETE, reason=reason)


def resolve_play_in(
    conference: str,
    ranked: Sequence[TeamStanding],
    games: Sequence[GameRecord],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> PlayInResult:
    """Determine seeds 7 and 8 for one conference."""
    participants = {s.seed: s for s in build_postseason_field(ranked, config)["play_in"]}
    r7, r8, r9, r10 = config.play_in_ranks
    if not all(rank in participants for rank in (r7, r8, r9, r10)):
        return _incomplete(conference, f"fewer than {r10} ranked teams")

    pool: List[GameRecord] = play_in_pool(games, config)
    if not pool:
        return _incomplete(conference, "no completed play-in games")

    conf_name = participants[r7].conference

    first = _find_game(pool, participants[r7].team_code, participants[r8].team_code)
    first_result = _decide(first) if first else None
    if first_result is None:
        return _incomplete(conference, f"{r7} vs {r8} not decided")
    seed7_code, first_loser = first_result

    second = _find_game(pool, participants[r9].team_code, participants[r10].team_code)
    second_result = _decide(second) if second else None
    if second_result is None:
        return _incomplete(conference, f"{r9} vs {r10} not decided")
    second_winner, second_loser = second_result

    final = _find_game(pool, first_loser, second_winner)
    final_result = _decide(final) if final else None
    if final_result is None:
        return _incomplete(conference, "final not decided")
    seed8_code, final_loser = final_result

    return PlayInResult(
        conference=conference,
        status=ResultStatus.COMPLETE,
        seed7=SeedEntry(team_code=seed7_code, seed=7, conference=conf_name),
        seed8=SeedEntry(team_code=seed8_code, seed=8, conference=conf_name),
        eliminated=(second_loser, final_loser),
        game_ids=(first.game_id, second.game_id, final.game_id),
    )
