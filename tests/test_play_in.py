import datetime as _dt

import pytest

from factories import EAST, WEST, make_game, play_in_games, regular_season, season_end_day, sweep, win
from postseason.config import PostseasonConfig
from postseason.models import NodeState, ResultStatus
from postseason.schedule import play_in_pool, regular_season_end_date
from playoffs import compute_standings, resolve_conference_play_in, resolve_postseason


def _season_with_play_in(east_games: int = 3):
    start = season_end_day() + _dt.timedelta(days=2)
    games = regular_season()
    games += play_in_games(EAST, start)[:east_games]
    games += play_in_games(WEST, start)
    return games


def test_season_end_is_last_full_slate_day() -> None:
    games = regular_season()
    assert regular_season_end_date(games) == season_end_day()
    assert regular_season_end_date(games, PostseasonConfig(regular_season_end_game_count=12)) is None


def test_play_in_pool_only_after_season_end() -> None:
    games = _season_with_play_in()
    pool = play_in_pool(games)
    assert len(pool) == 6
    assert all(g.game_day > season_end_day() for g in pool)


@pytest.mark.regression
def test_three_games_decide_seven_and_eight() -> None:
    games = _season_with_play_in()
    result = resolve_conference_play_in("East", games)

    assert result.status == ResultStatus.COMPLETE
    assert result.seed7.team_code == EAST[7]
    assert result.seed7.seed == 7
    assert result.seed8.team_code == EAST[6]
    assert result.eliminated == (EAST[9], EAST[8])
    assert len(result.game_ids) == 3


def test_two_of_three_games_is_incomplete() -> None:
    games = _season_with_play_in(east_games=2)
    result = resolve_conference_play_in("east", games)
    assert result.status == ResultStatus.INCOMPLETE
    assert result.seed7 is None and result.seed8 is None
    assert result.reason

    # the other conference is unaffected
    assert resolve_conference_play_in("west", games).is_complete


def test_no_play_in_games_yet() -> None:
    result = resolve_conference_play_in("east", regular_season())
    assert result.status == ResultStatus.INCOMPLETE


def test_fewer_than_ten_ranked_teams() -> None:
    day = _dt.date(2025, 11, 1)
    games = [win(EAST[i], EAST[i + 1], day=day, minute=i) for i in range(5)]
    standings = compute_standings(games)
    result = resolve_conference_play_in("east", games, standings=standings)
    assert result.status == ResultStatus.INCOMPLETE


def test_unknown_conference_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_conference_play_in("north", [])


@pytest.mark.regression
def test_full_postseason_snapshot_seeds_both_conferences() -> None:
    snapshot = resolve_postseason(_season_with_play_in())

    assert snapshot.season_year == 2025
    assert snapshot.seeds["east"][7].team_code == EAST[7]
    assert snapshot.seeds["west"][8].team_code == WEST[6]
    assert sorted(snapshot.seeds["west"]) == list(range(1, 9))

    playoffs = snapshot.playoffs
    assert playoffs.status == ResultStatus.IN_PROGRESS
    first = playoffs.node("PO2025_E_R1_1V8")
    assert (first.team_a, first.team_b) == (EAST[0], EAST[6])
    assert snapshot.to_dict()["seeds"]["east"][0]["team_code"] == EAST[0]


def _play_in_day() -> _dt.date:
    return season_end_day() + _dt.timedelta(days=2)


@pytest.mark.regression
def test_play_in_results_do_not_reorder_play_in_ranks() -> None:
    # one extra early win keeps rank 9 just behind rank 8 at season end
    games = regular_season()
    games.append(win(EAST[8], WEST[14], day=_dt.date(2025, 10, 22), minute=45))
    start = _play_in_day()
    label = "SoFi Play-In Tournament"
    games += [
        win(EAST[6], EAST[7], day=start, label=label),
        win(EAST[8], EAST[9], day=start, minute=30, label=label),
        win(EAST[8], EAST[7], day=start + _dt.timedelta(days=1), label=label),
    ]
    games += play_in_games(WEST, start)

    ranked = [s.team_code for s in compute_standings(games)["east"][6:10]]
    assert ranked == [EAST[6], EAST[8], EAST[7], EAST[9]]

    snapshot = resolve_postseason(games)
    result = snapshot.play_in["east"]
    assert result.status == ResultStatus.COMPLETE
    assert result.seed7.team_code == EAST[6]
    assert result.seed8.team_code == EAST[8]
    assert result.eliminated == (EAST[9], EAST[7])
    assert resolve_conference_play_in("east", games).seed8.team_code == EAST[8]

    # displayed standings still count the play-in games
    shown = {s.team_code: s for s in snapshot.standings["east"]}
    assert (shown[EAST[8]].wins, shown[EAST[8]].losses) == (10, 8)


@pytest.mark.regression
def test_first_round_series_do_not_reseed_bracket() -> None:
    games = _season_with_play_in()
    games += sweep(EAST[4], EAST[3], _play_in_day() + _dt.timedelta(days=3))

    assert [s.team_code for s in compute_standings(games)["east"][3:6]] == [EAST[4], EAST[5], EAST[3]]

    snapshot = resolve_postseason(games)
    assert snapshot.seeds["east"][4].team_code == EAST[3]
    assert snapshot.seeds["east"][5].team_code == EAST[4]

    node = snapshot.playoffs.node("PO2025_E_R1_4V5")
    assert (node.team_a, node.team_b) == (EAST[3], EAST[4])
    assert node.series == "0-4"
    assert node.state == NodeState.RESOLVED
    assert node.winner.team_code == EAST[4]


def test_tied_play_in_game_leaves_play_in_incomplete() -> None:
    start = _play_in_day()
    games = regular_season()
    first, second, final = play_in_games(EAST, start)
    tied = make_game(final.away.tricode, final.home.tricode, 104, 104, day=final.game_day, label=final.game_label)
    games += [first, second, tied]

    result = resolve_conference_play_in("east", games)
    assert result.status == ResultStatus.INCOMPLETE
    assert result.seed8 is None
