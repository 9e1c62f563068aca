from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Iterable, List, Optional, Sequence

from config import TEAM_TO_CONF_DIV
from ledger.types import GameRecord, GameStatus, TeamRef
from postseason.models import SeedEntry
from standings.types import HeadToHead, TeamStanding

EAST = [
    "BOS", "NYK", "MIL", "CLE", "ORL", "IND", "PHI", "MIA",
    "CHI", "ATL", "BKN", "TOR", "CHA", "WAS", "DET",
]
WEST = [
    "OKC", "DEN", "MIN", "LAC", "DAL", "PHX", "NOP", "LAL",
    "SAC", "GSW", "HOU", "UTA", "MEM", "SAS", "POR",
]

SEASON_START = _dt.date(2025, 10, 21)

_counter = {"n": 0}


def _next_id() -> str:
    _counter["n"] += 1
    return f"00225{_counter['n']:05d}"


def kickoff(day: _dt.date, minute: int = 0) -> _dt.datetime:
    return _dt.datetime(day.year, day.month, day.day, 23, 0, tzinfo=_dt.timezone.utc) + _dt.timedelta(minutes=minute)


def make_game(
    away: str,
    home: str,
    away_score: Optional[int] = None,
    home_score: Optional[int] = None,
    *,
    day: _dt.date = SEASON_START,
    minute: int = 0,
    game_id: Optional[str] = None,
    status: GameStatus = GameStatus.FINAL,
    label: str = "",
    sub_label: str = "",
    series_text: str = "",
    neutral: bool = False,
) -> GameRecord:
    return GameRecord(
        game_id=game_id or _next_id(),
        game_datetime_utc=kickoff(day, minute),
        status=status,
        home=TeamRef(tricode=home, score=home_score),
        away=TeamRef(tricode=away, score=away_score),
        game_code=f"{day:%Y%m%d}/{away}{home}",
        game_date=day,
        game_label=label,
        game_sub_label=sub_label,
        series_text=series_text,
        is_neutral=neutral,
    )


def win(winner: str, loser: str, *, home_wins: bool = True, **kwargs: Any) -> GameRecord:
    """Final game won 110-100 by `winner`."""
    if home_wins:
        return make_game(loser, winner, 100, 110, **kwargs)
    return make_game(winner, loser, 110, 100, **kwargs)


def round_robin(teams: Sequence[str]) -> List[tuple]:
    """(winner, loser) for every pair; earlier list position always wins."""
    return [(teams[i], teams[j]) for i in range(len(teams)) for j in range(i + 1, len(teams))]


def regular_season(per_day: int = 10) -> List[GameRecord]:
    """Synthetic season: in-conference round robins, then one full 15-game final day.

    Within each conference list position i finishes as seed i+1.
    """
    pairs = round_robin(EAST) + round_robin(WEST)
    games: List[GameRecord] = []
    day = SEASON_START
    for idx, (winner, loser) in enumerate(pairs):
        if idx and idx % per_day == 0:
            day += _dt.timedelta(days=1)
        games.append(win(winner, loser, home_wins=idx % 2 == 0, day=day, minute=idx % per_day))
    last_day = season_end_day(per_day)
    for i, (east, west) in enumerate(zip(EAST, WEST)):
        games.append(win(east, west, day=last_day, minute=i))
    return games


def season_end_day(per_day: int = 10) -> _dt.date:
    pairs = len(round_robin(EAST)) + len(round_robin(WEST))
    days = (pairs + per_day - 1) // per_day
    return SEASON_START + _dt.timedelta(days=days)


def play_in_games(conf: Sequence[str], start: _dt.date, *, upset_first: bool = True) -> List[GameRecord]:
    """Three play-in games for conference list `conf` (ranks 7..10 at index 6..9).

    With upset_first: 8 beats 7, 9 beats 10, then 7 beats 9 for the 8th seed.
    """
    r7, r8, r9, r10 = conf[6], conf[7], conf[8], conf[9]
    next_day = start + _dt.timedelta(days=1)
    if upset_first:
        first = win(r8, r7, day=start, minute=0, label="SoFi Play-In Tournament")
        final = win(r7, r9, day=next_day, label="SoFi Play-In Tournament")
    else:
        first = win(r7, r8, day=start, minute=0, label="SoFi Play-In Tournament")
        final = win(r8, r9, day=next_day, label="SoFi Play-In Tournament")
    second = win(r9, r10, day=start, minute=30, label="SoFi Play-In Tournament")
    return [first, second, final]


def series_text_after(team_a: str, team_b: str, wins_a: int, wins_b: int, needed: int = 4) -> str:
    if wins_a == wins_b:
        return f"Series tied {wins_a}-{wins_b}"
    leader, hi, lo = (team_a, wins_a, wins_b) if wins_a > wins_b else (team_b, wins_b, wins_a)
    verb = "wins series" if hi >= needed else "leads series"
    return f"{leader} {verb} {hi}-{lo}"


def series_games(
    team_a: str,
    team_b: str,
    winners: Iterable[str],
    start: _dt.date,
    *,
    with_text: bool = True,
) -> List[GameRecord]:
    """One final series game per entry in `winners`, with running series text."""
    games: List[GameRecord] = []
    wins = {team_a: 0, team_b: 0}
    for k, winner in enumerate(winners):
        loser = team_b if winner == team_a else team_a
        wins[winner] += 1
        text = series_text_after(team_a, team_b, wins[team_a], wins[team_b]) if with_text else "Game"
        home, away = (team_a, team_b) if k % 2 == 0 else (team_b, team_a)
        games.append(
            make_game(
                away,
                home,
                110 if winner == away else 100,
                110 if winner == home else 100,
                day=start + _dt.timedelta(days=2 * k),
                series_text=text,
            )
        )
    return games


def sweep(team_a: str, team_b: str, start: _dt.date) -> List[GameRecord]:
    return series_games(team_a, team_b, [team_a] * 4, start)


def seeds_for(conf_teams: Sequence[str], conference: str) -> Dict[int, SeedEntry]:
    return {i: SeedEntry(team_code=code, seed=i, conference=conference) for i, code in enumerate(conf_teams[:8], start=1)}


def make_standing(
    code: str,
    wins: int,
    losses: int,
    *,
    points_for: int = 0,
    points_against: int = 0,
    conf_wins: int = 0,
    conf_losses: int = 0,
    div_wins: int = 0,
    div_losses: int = 0,
    h2h: Optional[Dict[str, tuple]] = None,
) -> TeamStanding:
    info = TEAM_TO_CONF_DIV.get(code, {})
    return TeamStanding(
        team_code=code,
        conference=info.get("conference"),
        division=info.get("division"),
        wins=wins,
        losses=losses,
        conf_wins=conf_wins,
        conf_losses=conf_losses,
        div_wins=div_wins,
        div_losses=div_losses,
        points_for=points_for,
        points_against=points_against,
        head_to_head={opp: HeadToHead(wins=w, losses=l) for opp, (w, l) in (h2h or {}).items()},
    )


def raw_team(tricode: str, score: Any = None, team_id: int = 1610612700) -> Dict[str, Any]:
    return {
        "teamId": team_id,
        "teamTricode": tricode,
        "teamCity": "",
        "teamName": tricode,
        "wins": 0,
        "losses": 0,
        "score": score,
    }


def raw_game(
    game_id: str,
    away: str,
    home: str,
    away_score: Any = None,
    home_score: Any = None,
    *,
    status: int = 3,
    status_text: str = "Final",
    when: str = "2025-10-22T23:30:00Z",
    **extra: Any,
) -> Dict[str, Any]:
    day = when[:10]
    game = {
        "gameId": game_id,
        "gameCode": f"{day.replace('-', '')}/{away}{home}",
        "gameStatus": status,
        "gameStatusText": status_text,
        "gameDateTimeUTC": when,
        "gameDateEst": f"{day}T00:00:00Z",
        "gameLabel": "",
        "gameSubLabel": "",
        "seriesText": "",
        "isNeutral": False,
        "homeTeam": raw_team(home, home_score),
        "awayTeam": raw_team(away, away_score),
    }
    game.update(extra)
    return game


def schedule_payload(games: Sequence[Dict[str, Any]], season_year: str = "2025-26") -> Dict[str, Any]:
    by_day: Dict[str, List[Dict[str, Any]]] = {}
    for g in games:
        by_day.setdefault(str(g.get("gameDateEst", ""))[:10], []).append(g)
    return {
        "meta": {"version": 1},
        "leagueSchedule": {
            "seasonYear": season_year,
            "leagueId": "00",
            "gameDates": [{"gameDate": day, "games": gs} for day, gs in sorted(by_day.items())],
        },
    }
