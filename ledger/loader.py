from __future__ import annotations

"""Schedule feed -> Game Ledger.

This is the collaborator boundary: anything malformed at the *game* level is
dropped here (and logged with a capped warning); a document that is not a
schedule at all raises ValueError.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import ValidationError

import game_time

from .schema import CupSlotModel, ScheduleGameModel, ScheduleTeamModel, SchedulePayloadModel
from .types import GameRecord, GameStatus, Ledger, TeamRef

logger = logging.getLogger(__name__)
_WARN_COUNTS: Dict[str, int] = {}

_STATUS_BY_CODE = {1: GameStatus.SCHEDULED, 2: GameStatus.LIVE, 3: GameStatus.FINAL}
_POSTPONED_TEXTS = {"ppd", "postponed"}


def _warn_limited(code: str, msg: str, *, limit: int = 5) -> None:
    """Log warning, but cap repeats per code."""
    n = _WARN_COUNTS.get(code, 0)
    if n < limit:
        logger.warning("%s %s", code, msg)
    _WARN_COUNTS[code] = n + 1


def parse_status(status_code: Optional[int], status_text: str) -> GameStatus:
    text = (status_text or "").strip().lower()
    if text in _POSTPONED_TEXTS:
        return GameStatus.POSTPONED
    if status_code in _STATUS_BY_CODE:
        return _STATUS_BY_CODE[status_code]
    if text.startswith("final"):
        return GameStatus.FINAL
    for status in GameStatus:
        if text == status.value.lower():
            return status
    return GameStatus.SCHEDULED


def _team_ref(model: Optional[ScheduleTeamModel]) -> Optional[TeamRef]:
    if model is None or not model.tricode:
        return None
    return TeamRef(
        tricode=model.tricode.upper(),
        team_id=model.team_id,
        city=model.city,
        name=model.name,
        wins=model.wins,
        losses=model.losses,
        score=model.score,
    )


def game_from_model(model: ScheduleGameModel) -> Optional[GameRecord]:
    """Convert a validated feed game; None when its timestamp is unusable."""
    kickoff = game_time.parse_utc_timestamp(model.game_datetime_utc)
    if kickoff is None:
        return None
    return GameRecord(
        game_id=model.game_id,
        game_code=model.game_code,
        game_datetime_utc=kickoff,
        game_date=game_time.safe_date_fromisoformat(model.game_date_est),
        status=parse_status(model.game_status, model.game_status_text),
        home=_team_ref(model.home_team),
        away=_team_ref(model.away_team),
        game_label=model.game_label,
        game_sub_label=model.game_sub_label,
        series_text=model.series_text,
        is_neutral=model.is_neutral,
    )


def load_games(raw_games: Iterable[Mapping[str, Any]]) -> tuple[List[GameRecord], List[str]]:
    """Parse feed game dicts. Returns (games, skipped_ids)."""
    games: List[GameRecord] = []
    skipped: List[str] = []
    for raw in raw_games:
        raw_id = str((raw or {}).get("gameId") or "?") if isinstance(raw, Mapping) else "?"
        try:
            model = ScheduleGameModel.model_validate(raw)
        except ValidationError as exc:
            _warn_limited("FEED_GAME_INVALID", f"game_id={raw_id!r} errors={exc.error_count()}")
            skipped.append(raw_id)
            continue
        game = game_from_model(model)
        if game is None:
            _warn_limited("FEED_GAME_BAD_TIMESTAMP", f"game_id={raw_id!r}")
            skipped.append(raw_id)
            continue
        games.append(game)
    return games, skipped


def load_schedule_payload(payload: Mapping[str, Any]) -> Ledger:
    """Build a Ledger from the league schedule document.

    Raises ValueError if the payload is not a schedule document.
    """
    try:
        doc = SchedulePayloadModel.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Not a schedule payload: {exc.error_count()} validation error(s)") from exc

    raw_games: List[Mapping[str, Any]] = []
    for game_date in doc.league_schedule.game_dates:
        raw_games.extend(game_date.games)

    games, skipped = load_games(raw_games)
    if skipped:
        logger.info("schedule loaded: games=%d skipped=%d", len(games), len(skipped))
    return Ledger(games=tuple(games), season_id=doc.league_schedule.season_year, skipped=tuple(skipped))


def load_cup_slots(raw_slots: Sequence[Mapping[str, Any]]) -> List[CupSlotModel]:
    """Parse the optional cup seed/position feed. Invalid entries are dropped."""
    slots: List[CupSlotModel] = []
    for raw in raw_slots or []:
        try:
            slots.append(CupSlotModel.model_validate(raw))
        except ValidationError as exc:
            _warn_limited("CUP_SLOT_INVALID", f"errors={exc.error_count()}")
    return slots
