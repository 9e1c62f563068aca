from __future__ import annotations

"""Command-line report over a saved schedule feed.

  python league_report.py standings --schedule schedule.json [--team BOS]
  python league_report.py playoffs  --schedule schedule.json
  python league_report.py cup       --schedule schedule.json --cup-seeds cup.json --now 2025-12-20T00:00:00Z
  python league_report.py games     --schedule schedule.json --now 2025-12-20T00:00:00Z

Every command prints JSON to stdout.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ledger import Ledger, load_schedule_payload, partition_games, season_progress
from playoffs import compute_standings, resolve_cup_bracket, resolve_postseason
from team_utils import get_team_detail, standings_to_dict

logger = logging.getLogger(__name__)


def _read_json(path: str) -> Any:
    with Path(path).open("r", encoding="utf-8") as fh:
        return json.load(fh)


def _load_ledger(path: str) -> Ledger:
    return load_schedule_payload(_read_json(path))


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


# ----------------------------
# Commands
# ----------------------------

def _cmd_standings(args) -> None:
    ledger = _load_ledger(args.schedule)
    if args.team:
        _emit(get_team_detail(ledger, args.team))
        return
    _emit(standings_to_dict(compute_standings(ledger)))


def _cmd_playoffs(args) -> None:
    ledger = _load_ledger(args.schedule)
    snapshot = resolve_postseason(ledger, season_year=args.season_year)
    _emit(snapshot.to_dict())


def _cmd_cup(args) -> None:
    ledger = _load_ledger(args.schedule)
    raw_slots: List[Any] = _read_json(args.cup_seeds) if args.cup_seeds else []
    if not isinstance(raw_slots, list):
        raise ValueError("cup seed feed must be a JSON list")
    result = resolve_cup_bracket(ledger, raw_slots, now=args.now, season_year=args.season_year)
    _emit(result.to_dict())


def _game_row(game) -> dict:
    return {
        "game_id": game.game_id,
        "kickoff": game.game_datetime_utc.isoformat(),
        "status": game.status.value,
        "teams": list(game.team_codes),
    }


def _cmd_games(args) -> None:
    ledger = _load_ledger(args.schedule)
    views = partition_games(ledger, args.now)
    _emit({
        "progress": season_progress(ledger, args.now),
        "today": [_game_row(g) for g in views.today],
        "finished": [_game_row(g) for g in views.finished],
        "scheduled": [_game_row(g) for g in views.scheduled],
    })


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="League standings / postseason report")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_st = sub.add_parser("standings", help="conference standings")
    p_st.add_argument("--schedule", required=True, help="path to schedule JSON")
    p_st.add_argument("--team", default=None, help="single team tricode (optional)")
    p_st.set_defaults(func=_cmd_standings)

    p_po = sub.add_parser("playoffs", help="play-in, seeds and playoffs bracket")
    p_po.add_argument("--schedule", required=True, help="path to schedule JSON")
    p_po.add_argument("--season-year", type=int, default=None, help="override season start year")
    p_po.set_defaults(func=_cmd_playoffs)

    p_cup = sub.add_parser("cup", help="in-season cup knockout bracket")
    p_cup.add_argument("--schedule", required=True, help="path to schedule JSON")
    p_cup.add_argument("--cup-seeds", default=None, help="path to cup seed/position JSON")
    p_cup.add_argument("--now", required=True, help="reference UTC timestamp (ISO 8601)")
    p_cup.add_argument("--season-year", type=int, default=None, help="override season start year")
    p_cup.set_defaults(func=_cmd_cup)

    p_gm = sub.add_parser("games", help="today / finished / scheduled games and season progress")
    p_gm.add_argument("--schedule", required=True, help="path to schedule JSON")
    p_gm.add_argument("--now", required=True, help="reference UTC timestamp (ISO 8601)")
    p_gm.set_defaults(func=_cmd_games)

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except (OSError, ValueError) as exc:
        logger.debug("command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
