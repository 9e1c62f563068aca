"""Postseason (Play-In + Playoffs + in-season cup) subsystem.

Public entry points
-------------------
The `playoffs.py` module at project root re-exports:
- compute_standings
- resolve_conference_play_in
- resolve_postseason
- resolve_cup_bracket

Those functions are implemented in `postseason.director`.
"""

from .director import (
    PostseasonSnapshot,
    compute_standings,
    infer_season_year,
    resolve_conference_play_in,
    resolve_cup_bracket,
    resolve_postseason,
)

__all__ = [
    "PostseasonSnapshot",
    "compute_standings",
    "infer_season_year",
    "resolve_conference_play_in",
    "resolve_cup_bracket",
    "resolve_postseason",
]
