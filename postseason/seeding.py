from __future__ import annotations

"""Postseason field/seeding helpers.

This module is responsible for:
- Splitting ranked conference standings into auto bids / play-in / eliminated
- Merging play-in results into the 8-seed list the bracket consumes

No mutation happens here; results are new objects.
"""

from typing import Dict, List, Optional, Sequence

from standings.types import TeamStanding

from .config import DEFAULT_POSTSEASON_CONFIG, PostseasonConfig
from .models import PlayInResult, SeedEntry


def seed_entry_from_standing(row: TeamStanding, seed: Optional[int] = None) -> SeedEntry:
    """Normalize a ranked standings row into the SeedEntry shape used by postseason."""
    return SeedEntry(
        team_code=row.team_code,
        seed=int(seed if seed is not None else (row.rank or 0)),
        conference=row.conference,
    )


def build_postseason_field(
    ranked: Sequence[TeamStanding],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> Dict[str, List[SeedEntry]]:
    """{'auto_bids': [...], 'play_in': [...], 'eliminated': [...]} for one conference.

    List position i is seed i+1, independent of any stale `rank` on the rows.
    """
    seeds = [seed_entry_from_standing(r, seed=i) for i, r in enumerate(ranked, start=1)]
    last_play_in = max(config.play_in_ranks)
    return {
        "auto_bids": [s for s in seeds if s.seed <= config.auto_bid_seeds],
        "play_in": [s for s in seeds if s.seed in config.play_in_ranks],
        "eliminated": [s for s in seeds if s.seed > last_play_in],
    }


def build_playoff_seeds(
    ranked: Sequence[TeamStanding],
    play_in: Optional[PlayInResult],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> Dict[int, SeedEntry]:
    """Seed number -> entry: ranks 1..6 plus the play-in's seed 7 and 8.

    Seeds 7/8 are left out while the play-in is unresolved, so callers see
    fewer than `playoff_seeds` entries and treat the bracket as incomplete.
    """
    seeds: Dict[int, SeedEntry] = {
        s.seed: s for s in build_postseason_field(ranked, config)["auto_bids"]
    }
    if play_in is not None and play_in.is_complete:
        seeds[7] = SeedEntry(team_code=play_in.seed7.team_code, seed=7, conference=play_in.seed7.conference)
        seeds[8] = SeedEntry(team_code=play_in.seed8.team_code, seed=8, conference=play_in.seed8.conference)
    return dict(sorted(seeds.items()))


def pick_home_advantage(entry_a: SeedEntry, entry_b: SeedEntry) -> tuple[SeedEntry, SeedEntry]:
    """Return (higher seed, lower seed); tricode breaks equal seeds."""
    if entry_a.seed != entry_b.seed:
        return (entry_a, entry_b) if entry_a.seed < entry_b.seed else (entry_b, entry_a)
    return (entry_a, entry_b) if entry_a.team_code < entry_b.team_code else (entry_b, entry_a)
