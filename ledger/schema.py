from __future__ import annotations

"""Pydantic models for the raw upstream feeds.

Only the fields the engine reads are declared; everything else in the upstream
document is ignored. Field names follow the upstream camelCase via aliases.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FeedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _optional_int(value: Any) -> Optional[int]:
    # Scores arrive as ints, numeric strings, "" or null depending on feed vintage.
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    s = str(value).strip()
    if not s.lstrip("-").isdigit():
        return None
    return int(s)


class ScheduleTeamModel(_FeedModel):
    team_id: Optional[int] = Field(default=None, alias="teamId")
    tricode: str = Field(default="", alias="teamTricode")
    city: str = Field(default="", alias="teamCity")
    name: str = Field(default="", alias="teamName")
    wins: Optional[int] = None
    losses: Optional[int] = None
    score: Optional[int] = None

    @field_validator("team_id", "wins", "losses", "score", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> Optional[int]:
        return _optional_int(value)

    @field_validator("tricode", "city", "name", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()


class ScheduleGameModel(_FeedModel):
    game_id: str = Field(alias="gameId")
    game_code: str = Field(default="", alias="gameCode")
    game_status: Optional[int] = Field(default=None, alias="gameStatus")
    game_status_text: str = Field(default="", alias="gameStatusText")
    game_datetime_utc: str = Field(alias="gameDateTimeUTC")
    game_date_est: Optional[str] = Field(default=None, alias="gameDateEst")
    game_label: str = Field(default="", alias="gameLabel")
    game_sub_label: str = Field(default="", alias="gameSubLabel")
    series_text: str = Field(default="", alias="seriesText")
    is_neutral: bool = Field(default=False, alias="isNeutral")
    home_team: Optional[ScheduleTeamModel] = Field(default=None, alias="homeTeam")
    away_team: Optional[ScheduleTeamModel] = Field(default=None, alias="awayTeam")

    @field_validator("game_id", mode="before")
    @classmethod
    def _require_game_id(cls, value: Any) -> str:
        s = "" if value is None else str(value).strip()
        if not s:
            raise ValueError("gameId is empty")
        return s

    @field_validator("game_status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> Optional[int]:
        return _optional_int(value)

    @field_validator(
        "game_code", "game_status_text", "game_label", "game_sub_label", "series_text", mode="before"
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("is_neutral", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"true", "1", "yes"}
        return bool(value)


class GameDateModel(_FeedModel):
    game_date: str = Field(default="", alias="gameDate")
    games: List[dict] = Field(default_factory=list)


class LeagueScheduleModel(_FeedModel):
    season_year: Optional[str] = Field(default=None, alias="seasonYear")
    game_dates: List[GameDateModel] = Field(alias="gameDates")


class SchedulePayloadModel(_FeedModel):
    league_schedule: LeagueScheduleModel = Field(alias="leagueSchedule")


class CupSlotModel(_FeedModel):
    """One entry of the optional cup seed/position feed."""

    matchup: str
    conference: str = ""
    high_seed: str = Field(alias="highSeed")
    low_seed: str = Field(alias="lowSeed")
    high_seed_number: Optional[int] = Field(default=None, alias="highSeedNumber")
    low_seed_number: Optional[int] = Field(default=None, alias="lowSeedNumber")
    # Which display slot ('A' top / 'B' bottom) shows the high seed.
    high_seed_slot: str = Field(default="A", alias="highSeedSlot")

    @field_validator("matchup", "high_seed", "low_seed", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> str:
        s = "" if value is None else str(value).strip().upper()
        if not s:
            raise ValueError("value is empty")
        return s

    @field_validator("high_seed_slot", mode="before")
    @classmethod
    def _slot(cls, value: Any) -> str:
        s = "A" if value is None else str(value).strip().upper()
        if s not in {"A", "B"}:
            raise ValueError(f"highSeedSlot must be 'A' or 'B', got {value!r}")
        return s

    @field_validator("high_seed_number", "low_seed_number", mode="before")
    @classmethod
    def _seed_number(cls, value: Any) -> Optional[int]:
        return _optional_int(value)
