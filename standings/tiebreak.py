from __future__ import annotations

"""Conference tie-break ordering.

Criteria, first discriminator wins:
1) win pct
2) two-team head-to-head pct (only if the teams have met)
3) division leader precedence
4) division win pct (same division only)
5) conference win pct
6) point differential
7) wins desc, losses asc, tricode asc

Division leaders are computed once per conference with criteria 1/6/7 only and
treated as a fixed fact by the main sort. This is deliberately simpler than the
league's official multi-team procedure.
"""

from dataclasses import replace
from functools import cmp_to_key
from typing import Dict, FrozenSet, Iterable, List, Sequence

from .types import TeamStanding


def _sign(a: float, b: float) -> int:
    # -1 when a is better (larger), +1 when b is better.
    if a > b:
        return -1
    if a < b:
        return 1
    return 0


def _stabilizers(a: TeamStanding, b: TeamStanding) -> int:
    c = _sign(a.wins, b.wins)
    if c:
        return c
    c = _sign(b.losses, a.losses)
    if c:
        return c
    if a.team_code == b.team_code:
        return 0
    return -1 if a.team_code < b.team_code else 1


def division_leader_key(row: TeamStanding) -> tuple:
    return (-row.win_pct, -row.point_diff, -row.wins, row.losses, row.team_code)


def division_leaders(rows: Iterable[TeamStanding]) -> FrozenSet[str]:
    """Tricodes of the team leading each division (criteria 1/6/7 only)."""
    by_division: Dict[str, List[TeamStanding]] = {}
    for row in rows:
        if row.division:
            by_division.setdefault(row.division, []).append(row)
    return frozenset(
        min(members, key=division_leader_key).team_code
        for members in by_division.values()
        if members
    )


def compare_standings(a: TeamStanding, b: TeamStanding, leaders: FrozenSet[str] = frozenset()) -> int:
    """Negative when `a` ranks ahead of `b`."""
    c = _sign(a.win_pct, b.win_pct)
    if c:
        return c

    h2h = a.head_to_head_vs(b.team_code)
    if h2h.games > 0:
        c = _sign(h2h.wins / h2h.games, h2h.losses / h2h.games)
        if c:
            return c

    a_leads = a.team_code in leaders
    b_leads = b.team_code in leaders
    if a_leads != b_leads:
        return -1 if a_leads else 1

    if a.division and a.division == b.division:
        c = _sign(a.div_win_pct, b.div_win_pct)
        if c:
            return c

    c = _sign(a.conf_win_pct, b.conf_win_pct)
    if c:
        return c

    c = _sign(a.point_diff, b.point_diff)
    if c:
        return c

    return _stabilizers(a, b)


def sort_conference(rows: Sequence[TeamStanding]) -> List[TeamStanding]:
    leaders = division_leaders(rows)
    return sorted(rows, key=cmp_to_key(lambda a, b: compare_standings(a, b, leaders)))


def rank_conference(rows: Sequence[TeamStanding]) -> List[TeamStanding]:
    """Sort best-first and fill rank (1-based) and games behind the leader."""
    rows_sorted = sort_conference(rows)
    if not rows_sorted:
        return rows_sorted

    leader = rows_sorted[0]
    ranked: List[TeamStanding] = []
    for idx, r in enumerate(rows_sorted, start=1):
        gb = ((leader.wins - r.wins) + (r.losses - leader.losses)) / 2
        ranked.append(replace(r, rank=idx, games_behind=gb))
    return ranked
