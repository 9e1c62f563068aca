import datetime as _dt

import pytest

from factories import make_game, win
from ledger import partition_games, season_progress
from ledger.types import GameStatus

DAY = _dt.date(2025, 11, 3)
NOW = "2025-11-03T18:00:00Z"


def _slate():
    return [
        make_game("BOS", "NYK", status=GameStatus.SCHEDULED, day=DAY + _dt.timedelta(days=2), game_id="g-later"),
        win("MIA", "ORL", day=DAY - _dt.timedelta(days=1), minute=30, game_id="g-final-2"),
        make_game("CHI", "DET", status=GameStatus.POSTPONED, day=DAY - _dt.timedelta(days=1), game_id="g-ppd"),
        make_game("LAL", "GSW", status=GameStatus.SCHEDULED, day=DAY, minute=90, game_id="g-today-late"),
        win("OKC", "DEN", day=DAY, game_id="g-today-final"),
        make_game("SAC", "POR", status=GameStatus.SCHEDULED, day=DAY + _dt.timedelta(days=1), game_id="g-next"),
        win("MIL", "CLE", day=DAY - _dt.timedelta(days=3), game_id="g-final-1"),
    ]


def test_partition_into_today_finished_scheduled() -> None:
    views = partition_games(_slate(), NOW)

    assert [g.game_id for g in views.today] == ["g-today-final", "g-today-late"]
    assert [g.game_id for g in views.finished] == ["g-final-1", "g-ppd", "g-final-2"]
    assert [g.game_id for g in views.scheduled] == ["g-next", "g-later"]
    assert views.total == 7


def test_today_wins_over_status() -> None:
    # a final game played today stays in today's slate
    views = partition_games([win("OKC", "DEN", day=DAY)], NOW)
    assert len(views.today) == 1 and views.finished == ()


def test_season_progress_counts_finished_and_todays_finals() -> None:
    # 3 finished + 1 final today, out of 7
    assert season_progress(_slate(), NOW) == pytest.approx(57.14)
    assert season_progress([], NOW) == 0.0


def test_postponed_today_is_not_progress() -> None:
    games = [
        make_game("CHI", "DET", status=GameStatus.POSTPONED, day=DAY),
        make_game("CHI", "DET", status=GameStatus.POSTPONED, day=DAY - _dt.timedelta(days=1)),
    ]
    assert season_progress(games, NOW) == 50.0
    assert season_progress(games, "2025-11-10T00:00:00Z") == 100.0


def test_invalid_now_is_rejected() -> None:
    with pytest.raises(ValueError):
        partition_games(_slate(), "not a time")
