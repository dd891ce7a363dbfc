import pandas as pd
import pytest

from pipeline import normalize_games


def game_row(first, last, date, points, win=1, plus_minus=0, game_type="Regular Season"):
    return {
        "firstName": first,
        "lastName": last,
        "gameDate": date,
        "gameType": game_type,
        "points": points,
        "win": win,
        "plusMinusPoints": plus_minus,
    }


@pytest.fixture
def raw_games():
    rows = [
        # 2023 season: A 25 ppg, B 20, C 15, D 10, E 5
        game_row("Alpha", "Ace", "2023-10-25 19:30:00", 24, win=1, plus_minus=5),
        game_row("Bravo", "Best", "2023-10-25 19:30:00", 20, win=0, plus_minus=-4),
        game_row("Charlie", "Cole", "2023-10-26 19:00:00", 15, win=1, plus_minus=2),
        game_row("Alpha", "Ace", "2023-11-02 19:30:00", 26, win=0, plus_minus=-3),
        game_row("Delta", "Dunn", "2023-11-03 20:00:00", 10, win=0, plus_minus=-1),
        game_row("Echo", "Eve", "2023-11-03 20:00:00", 5, win=1, plus_minus=1),
        game_row("Alpha", "Ace", "2024-01-15 19:30:00", 25, win=1, plus_minus=8),
        game_row("Bravo", "Best", "2024-03-01 19:30:00", 20, win=1, plus_minus=6),
        # playoff game in the same season is ignored
        game_row("Echo", "Eve", "2024-04-25 20:00:00", 60, win=1, plus_minus=30, game_type="Playoffs"),
        # 2022 season (September 2023 still belongs to it)
        game_row("Foxtrot", "Fay", "2023-09-30 19:00:00", 30, win=1, plus_minus=10),
        game_row("Alpha", "Ace", "2022-12-25 12:00:00", 18, win=0, plus_minus=-2),
    ]
    return pd.DataFrame(rows)


@pytest.fixture
def games(raw_games):
    return normalize_games(raw_games)
