"""Compatibility facade.

Callers import postseason entry points from here; the implementation lives in
the `postseason` package.
"""

from postseason import (
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
