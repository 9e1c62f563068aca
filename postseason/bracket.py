from __future__ import annotations

"""Single-elimination bracket resolution from completed games.

The engine walks a fixed layout round by round. Each node is
Unseeded -> Seeded -> InProgress -> Resolved; a later-round node is seeded only
when both feeder nodes are resolved, carrying each winner's tricode and
original seed forward.

Games arrive as an unordered pool. A game is attributed to the node whose two
tricodes both appear in the game's compact team pair, then leaves the pool, so
a rematch in a later round can never be credited to an earlier node. Games
that match no open node stay in the pool (they may belong to a round that has
not opened yet).
"""

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ledger.types import GameRecord

from . import ids
from .config import DEFAULT_POSTSEASON_CONFIG, PostseasonConfig
from .models import (
    BracketLayout,
    BracketResult,
    BracketRound,
    MatchupNode,
    NodeSpec,
    NodeState,
    ResultStatus,
    SeedEntry,
)
from .schedule import playoff_pool
from .seeding import pick_home_advantage
from .series import normalize_series_text

logger = logging.getLogger(__name__)

Orienter = Callable[[NodeSpec, SeedEntry, SeedEntry], Tuple[SeedEntry, SeedEntry]]

ROUND_NAMES = (
    "Conference Quarterfinals",
    "Conference Semifinals",
    "Conference Finals",
    "NBA Finals",
)


def _feeder_order(spec: NodeSpec, first: SeedEntry, second: SeedEntry) -> Tuple[SeedEntry, SeedEntry]:
    return first, second


def _higher_seed_first(spec: NodeSpec, first: SeedEntry, second: SeedEntry) -> Tuple[SeedEntry, SeedEntry]:
    return pick_home_advantage(first, second)


# ---------------------------------------------------------------------------
# Game attribution / series bookkeeping
# ---------------------------------------------------------------------------

def pair_codes(game: GameRecord) -> frozenset:
    """Tricodes named by the game's compact pair ('CLEGSW' -> {'CLE', 'GSW'})."""
    pair = game.team_pair
    if len(pair) == 6:
        return frozenset((pair[:3], pair[3:]))
    return frozenset(game.team_codes)


def game_matches(node: MatchupNode, game: GameRecord) -> bool:
    if node.team_a is None or node.team_b is None:
        return False
    codes = pair_codes(game)
    return node.team_a in codes and node.team_b in codes


def _refresh(node: MatchupNode, wins_needed: int) -> None:
    if node.wins_a > node.wins_b:
        node.leading_team, node.leading_seed = node.team_a, node.seed_a
    elif node.wins_b > node.wins_a:
        node.leading_team, node.leading_seed = node.team_b, node.seed_b
    else:
        node.leading_team, node.leading_seed = None, None

    if max(node.wins_a, node.wins_b) >= wins_needed:
        node.state = NodeState.RESOLVED
        node.winner = node.entry_for(node.leading_team)
    elif node.game_ids:
        node.state = NodeState.IN_PROGRESS
    else:
        node.state = NodeState.SEEDED


def attribute_games(node: MatchupNode, pool: Sequence[GameRecord], wins_needed: int) -> List[GameRecord]:
    """Consume matching games (in pool order) into `node`; return the games left over.

    Series score: the latest consumed game's feed text when it parses, else the
    count of decided games. A resolved node takes no further games.
    """
    counted_a = counted_b = 0
    remaining: List[GameRecord] = []
    for game in pool:
        if node.is_resolved or not game_matches(node, game):
            remaining.append(game)
            continue

        node.game_ids.append(game.game_id)
        winner = game.winner
        if winner is not None:
            if winner.tricode == node.team_a:
                counted_a += 1
            elif winner.tricode == node.team_b:
                counted_b += 1

        parsed = normalize_series_text(game.series_text, node.team_a, node.team_b)
        if parsed is not None:
            node.wins_a, node.wins_b = parsed.wins_a, parsed.wins_b
        else:
            node.wins_a, node.wins_b = counted_a, counted_b
        _refresh(node, wins_needed)

    return remaining


# ---------------------------------------------------------------------------
# Generic engine
# ---------------------------------------------------------------------------

def _seat(
    spec: NodeSpec,
    nodes: Mapping[str, MatchupNode],
    entrants: Mapping[str, Tuple[SeedEntry, SeedEntry]],
    orient: Orienter,
) -> Optional[Tuple[SeedEntry, SeedEntry]]:
    if spec.feeders is None:
        return entrants.get(spec.node_id)
    left = nodes.get(spec.feeders[0])
    right = nodes.get(spec.feeders[1])
    if left is None or right is None or not (left.is_resolved and right.is_resolved):
        return None
    return orient(spec, left.winner, right.winner)


def resolve_bracket(
    layout: BracketLayout,
    entrants: Mapping[str, Tuple[SeedEntry, SeedEntry]],
    games: Iterable[GameRecord],
    *,
    orient: Orienter = _feeder_order,
) -> BracketResult:
    """Resolve every node of `layout` that the games allow.

    `entrants` maps first-round node ids to their (teamA, teamB) entries.
    `games` should already be filtered to the tournament's qualifying games.
    """
    pool: List[GameRecord] = sorted(games, key=lambda g: (g.game_datetime_utc, g.game_id))
    nodes: Dict[str, MatchupNode] = {}
    rounds: List[BracketRound] = []

    for round_specs in layout.rounds():
        rnd = BracketRound(index=round_specs[0].round_index, name=round_specs[0].round_name)
        for spec in round_specs:
            node = MatchupNode(
                node_id=spec.node_id,
                round_name=spec.round_name,
                conference=spec.conference,
                feeders=spec.feeders,
                label=spec.label,
            )
            seated = _seat(spec, nodes, entrants, orient)
            if seated is not None:
                node.entry_a, node.entry_b = seated
                node.state = NodeState.SEEDED
                pool = attribute_games(node, pool, layout.wins_needed)
            nodes[spec.node_id] = node
            rnd.matchups.append(node)
        rounds.append(rnd)

    if pool:
        logger.debug("%s bracket: %d game(s) left unattributed", layout.kind, len(pool))

    final_round = rounds[-1] if rounds else None
    if final_round is not None and final_round.is_complete and len(final_round.matchups) == 1:
        return BracketResult(
            kind=layout.kind,
            status=ResultStatus.COMPLETE,
            rounds=rounds,
            champion=final_round.matchups[0].winner,
        )
    return BracketResult(kind=layout.kind, status=ResultStatus.IN_PROGRESS, rounds=rounds)


# ---------------------------------------------------------------------------
# Conference playoffs (best-of-7)
# ---------------------------------------------------------------------------

def build_playoffs_layout(
    season_year: int,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> BracketLayout:
    specs: List[NodeSpec] = []
    conf_finals: List[str] = []

    for conf in ("east", "west"):
        current: List[NodeSpec] = []
        for high, low in config.first_round_pairs:
            current.append(
                NodeSpec(
                    node_id=ids.make_series_id(season_year, conf, "R1", f"{high}V{low}"),
                    round_index=0,
                    round_name=ROUND_NAMES[0],
                    conference=conf,
                    seed_pair=(high, low),
                    label=f"{high} vs {low}",
                )
            )
        specs.extend(current)

        round_index = 1
        while len(current) > 1:
            nxt: List[NodeSpec] = []
            is_conf_final = len(current) == 2
            for i in range(0, len(current), 2):
                if is_conf_final:
                    round_code, label = "CF", "CF"
                else:
                    round_code, label = f"R{round_index + 1}", f"SF{i // 2 + 1}"
                nxt.append(
                    NodeSpec(
                        node_id=ids.make_series_id(season_year, conf, round_code, label),
                        round_index=round_index,
                        round_name=ROUND_NAMES[min(round_index, 2)],
                        conference=conf,
                        feeders=(current[i].node_id, current[i + 1].node_id),
                        label=label,
                    )
                )
            specs.extend(nxt)
            current = nxt
            round_index += 1
        conf_finals.append(current[0].node_id)

    specs.append(
        NodeSpec(
            node_id=ids.make_series_id(season_year, "finals", "F", "FIN"),
            round_index=max(s.round_index for s in specs) + 1,
            round_name=ROUND_NAMES[3],
            conference="finals",
            feeders=(conf_finals[0], conf_finals[1]),
            label="FINALS",
        )
    )
    return BracketLayout(kind="playoffs", wins_needed=int(config.series_wins_needed), nodes=tuple(specs))


def resolve_playoffs(
    seeds_by_conf: Mapping[str, Mapping[int, SeedEntry]],
    games: Iterable[GameRecord],
    *,
    season_year: int,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> BracketResult:
    """Resolve the conference playoffs bracket.

    Incomplete (and nothing else computed) if either conference lacks any of
    seeds 1..playoff_seeds.
    """
    needed = range(1, int(config.playoff_seeds) + 1)
    for conf in ("east", "west"):
        seeds = seeds_by_conf.get(conf) or {}
        missing = [n for n in needed if n not in seeds]
        if missing:
            reason = f"{conf}: missing seeds {missing}"
            logger.debug("playoffs incomplete: %s", reason)
            return BracketResult(kind="playoffs", status=ResultStatus.INCOMPLETE, reason=reason)

    layout = build_playoffs_layout(season_year, config)
    entrants: Dict[str, Tuple[SeedEntry, SeedEntry]] = {}
    for spec in layout.nodes:
        if spec.seed_pair is None:
            continue
        seeds = seeds_by_conf[spec.conference]
        high, low = spec.seed_pair
        entrants[spec.node_id] = (seeds[high], seeds[low])

    return resolve_bracket(layout, entrants, playoff_pool(games, config), orient=_higher_seed_first)
