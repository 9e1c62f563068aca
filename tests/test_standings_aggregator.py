import datetime as _dt
import json

import pytest

from factories import EAST, WEST, make_game, regular_season, win
from ledger.types import GameRecord, GameStatus, TeamRef
from standings import compute_team_standings
from team_utils import get_conference_standings, get_team_detail, standings_to_dict

DAY = _dt.date(2025, 11, 3)


def test_wins_equal_losses_league_wide() -> None:
    games = regular_season()
    table = compute_team_standings(games)
    assert sum(t.wins for t in table.values()) == sum(t.losses for t in table.values())
    counted = sum(1 for g in games if g.is_final)
    assert sum(t.wins for t in table.values()) == counted


def test_per_team_games_match_ledger() -> None:
    games = regular_season()
    table = compute_team_standings(games)
    for code, row in table.items():
        expected = sum(1 for g in games if g.is_final and g.involves(code))
        assert row.wins + row.losses == expected


def test_team_without_completed_games_is_zero_zero() -> None:
    games = [
        win("BOS", "NYK", day=DAY),
        make_game("MIA", "ORL", status=GameStatus.SCHEDULED, day=DAY + _dt.timedelta(days=1)),
    ]
    table = compute_team_standings(games)
    assert table["MIA"].wins == 0 and table["MIA"].losses == 0
    assert table["MIA"].streak == "-"
    assert table["ORL"].last10 == "0-0"


def test_preseason_and_cup_championship_excluded() -> None:
    games = [
        win("BOS", "NYK", day=DAY, label="Preseason"),
        win("MIL", "OKC", day=DAY, label="Emirates NBA Cup", sub_label="Championship", neutral=True),
        win("MIL", "NYK", day=DAY, label="Emirates NBA Cup", sub_label="Semifinal", neutral=True),
    ]
    table = compute_team_standings(games)
    assert table["BOS"].wins == 0
    assert table["OKC"].losses == 0
    assert table["MIL"].wins == 1
    assert table["MIL"].neutral_record == "1-0"


def test_ties_and_missing_scores_are_skipped() -> None:
    games = [
        make_game("BOS", "NYK", 100, 100, day=DAY),
        make_game("BOS", "NYK", None, 99, day=DAY),
        win("NYK", "BOS", day=DAY),
    ]
    table = compute_team_standings(games)
    assert (table["NYK"].wins, table["BOS"].losses) == (1, 1)


def test_games_missing_a_team_reference_are_skipped() -> None:
    kickoff = _dt.datetime(2025, 11, 3, 23, 0, tzinfo=_dt.timezone.utc)
    games = [
        GameRecord("0022500901", kickoff, GameStatus.FINAL, home=None, away=TeamRef("BOS", score=120)),
        GameRecord("0022500902", kickoff, GameStatus.FINAL, home=TeamRef("MIA", score=98), away=None),
        win("NYK", "BOS", day=DAY + _dt.timedelta(days=1)),
    ]
    table = compute_team_standings(games)
    assert set(table) == {"BOS", "MIA", "NYK"}
    assert (table["MIA"].wins, table["MIA"].losses) == (0, 0)
    assert (table["BOS"].wins, table["BOS"].losses) == (0, 1)
    assert (table["NYK"].wins, table["NYK"].losses) == (1, 0)


def test_splits_and_streak() -> None:
    games = [
        win("BOS", "NYK", day=DAY, home_wins=False),
        win("BOS", "MIL", day=DAY + _dt.timedelta(days=1)),
        win("GSW", "BOS", day=DAY + _dt.timedelta(days=2)),
        win("BOS", "LAL", day=DAY + _dt.timedelta(days=3)),
        win("BOS", "PHI", day=DAY + _dt.timedelta(days=4)),
    ]
    row = compute_team_standings(games)["BOS"]
    assert (row.wins, row.losses) == (4, 1)
    assert row.away_record == "1-1"
    assert row.home_record == "3-0"
    assert row.division_record == "2-0"  # NYK, PHI
    assert row.conference_record == "3-0"
    assert row.streak == "W 2"
    assert row.head_to_head_vs("GSW").losses == 1
    assert row.point_diff == 30


def test_results_follow_kickoff_order_not_ledger_order() -> None:
    late = win("NYK", "BOS", day=DAY + _dt.timedelta(days=1))
    early = win("BOS", "NYK", day=DAY)
    row = compute_team_standings([late, early])["BOS"]
    assert row.streak == "L 1"


def test_aggregation_is_idempotent() -> None:
    games = regular_season()
    first = json.dumps(standings_to_dict(get_conference_standings(games)), sort_keys=True)
    second = json.dumps(standings_to_dict(get_conference_standings(list(reversed(games)))), sort_keys=True)
    assert first == second


@pytest.mark.regression
def test_synthetic_season_ranks_in_list_order() -> None:
    standings = get_conference_standings(regular_season())
    assert [r.team_code for r in standings["east"]] == EAST
    assert [r.team_code for r in standings["west"]] == WEST
    assert standings["east"][0].rank == 1
    assert standings["east"][0].games_behind == 0
    assert standings["east"][1].games_behind == 1.0


def test_team_detail_lookup() -> None:
    detail = get_team_detail([win("BOS", "NYK", day=DAY)], "bos")
    assert detail["team_code"] == "BOS"
    assert detail["rank"] == 1
    with pytest.raises(ValueError):
        get_team_detail([win("BOS", "NYK", day=DAY)], "XXX")
