"""
Top-scorer impact pipeline.

Turns raw per-game player rows into the tables the dashboard draws:

    load_games -> filter_season -> top_scorers -> summarize_metric
                                                  -> join_scatter
                                                  -> cumulative_win_rate

Every stage is a pure function of its inputs. Missing numeric values are
skipped by the means (never read as zero), and an empty season or an empty
player selection simply yields empty frames.
"""

import functools
import os
from typing import NamedTuple, Optional, Sequence

import numpy as np
import pandas as pd

import config
from log import get_logger

log = get_logger("pipeline")

SUMMARY_COLUMNS = {
    config.WIN_RATE: ["Player", config.WIN_RATE],
    config.PLUS_MINUS: ["Player", "gameDate", config.PLUS_MINUS],
}
TREND_COLUMNS = ["Player", "gameDate", "game_number", "cumulative_win_rate"]


# =========================
# ERRORS
# =========================
class GameDataError(ValueError):
    """The games table cannot be used to build the dashboard."""


class MissingColumnsError(GameDataError):
    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"games table is missing required column(s): {', '.join(self.missing)}")


class GameDateParseError(GameDataError):
    def __init__(self, rows: Sequence[int], values: Sequence):
        self.rows = list(rows)
        self.values = list(values)
        preview = ", ".join(f"row {r}: {v!r}" for r, v in zip(self.rows[:5], self.values[:5]))
        more = f" (+{len(self.rows) - 5} more)" if len(self.rows) > 5 else ""
        super().__init__(f"could not parse gameDate for {len(self.rows)} row(s): {preview}{more}")


class UnknownMetricError(ValueError):
    def __init__(self, metric):
        self.metric = metric
        super().__init__(f"unknown metric {metric!r}; expected one of {sorted(config.METRIC_LABELS)}")


def check_metric(metric: str) -> str:
    if metric not in config.METRIC_LABELS:
        raise UnknownMetricError(metric)
    return metric


# =========================
# LOAD + NORMALIZE
# =========================
def season_label(game_dates: pd.Series) -> pd.Series:
    """Season start year: October onward counts toward that year, earlier months toward the previous one."""
    before_start = (game_dates.dt.month < config.SEASON_START_MONTH).astype(int)
    return (game_dates.dt.year - before_start).astype(int)


UTC_OFFSET = r"^(.*\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)\s*(?:Z|[+-]\d{2}:?\d{2})$"


def parse_game_dates(raw: pd.Series) -> pd.Series:
    # keep the local wall-clock time: offsets are dropped, not converted
    wall_clock = raw.astype(str).str.strip().str.replace(UTC_OFFSET, r"\1", regex=True)
    parsed = pd.to_datetime(wall_clock, errors="coerce", format="mixed")
    bad = parsed.isna()
    if bad.any():
        raise GameDateParseError(np.flatnonzero(bad.to_numpy()).tolist(), raw[bad].tolist())
    return parsed


def win_indicator(raw: pd.Series) -> pd.Series:
    if pd.api.types.is_numeric_dtype(raw):
        return raw.astype(float)

    flags = raw.astype(str).str.strip().str.lower().map({"true": 1.0, "false": 0.0})
    numeric = pd.to_numeric(raw.where(flags.isna()), errors="coerce")
    return flags.fillna(numeric).astype(float)


def _name_part(s: pd.Series) -> pd.Series:
    return s.fillna("").astype(str).str.strip()


def normalize_games(raw: pd.DataFrame) -> pd.DataFrame:
    missing = [c for c in config.REQUIRED_COLUMNS if c not in raw.columns]
    if missing:
        raise MissingColumnsError(missing)

    df = raw.reset_index(drop=True)
    game_dates = parse_game_dates(df["gameDate"])

    return pd.DataFrame(
        {
            "Player": (_name_part(df["firstName"]) + " " + _name_part(df["lastName"])).str.strip(),
            "gameDate": game_dates,
            "season": season_label(game_dates),
            "gameType": df["gameType"].fillna("").astype(str).str.strip(),
            "points": pd.to_numeric(df["points"], errors="coerce"),
            "win": win_indicator(df["win"]),
            "plusMinusPoints": pd.to_numeric(df["plusMinusPoints"], errors="coerce"),
        }
    )


def load_games(path) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Could not find {path}. Set NBA_DATA_PATH or put PlayerStatistics.csv next to app.py.")

    wanted = set(config.REQUIRED_COLUMNS)
    raw = pd.read_csv(path, usecols=lambda c: c.strip() in wanted, low_memory=False)
    raw.columns = [c.strip() for c in raw.columns]

    games = normalize_games(raw)
    log.info(
        "games_loaded",
        path=str(path),
        rows=len(games),
        players=int(games["Player"].nunique()),
        seasons=int(games["season"].nunique()),
    )
    return games


# =========================
# SEASON SLICE + RANKING
# =========================
def filter_season(games: pd.DataFrame, season: int) -> pd.DataFrame:
    mask = (games["season"] == int(season)) & (games["gameType"] == config.REGULAR_SEASON)
    return games.loc[mask].copy()


def points_per_game(season_slice: pd.DataFrame) -> pd.Series:
    """Mean points per player in first-appearance order; players with no recorded points are dropped."""
    return season_slice.groupby("Player", sort=False)["points"].mean().dropna().rename("ppg")


def top_scorers(season_slice: pd.DataFrame, n: int = config.TOP_N) -> list:
    ppg = points_per_game(season_slice)
    # ascending stable sort on the negated mean keeps equal means in first-appearance order
    ranked = (-ppg).sort_values(kind="stable")
    return ranked.head(n).index.tolist()


# =========================
# METRICS
# =========================
def _unique(players: Optional[Sequence[str]]) -> list:
    return list(dict.fromkeys(players or []))


def summarize_metric(season_slice: pd.DataFrame, metric: str, players: Sequence[str]) -> pd.DataFrame:
    check_metric(metric)
    players = _unique(players)
    games = season_slice.loc[season_slice["Player"].isin(players)]

    if metric == config.WIN_RATE:
        rates = games.groupby("Player", sort=False)["win"].mean()
        rates = rates.reindex([p for p in players if p in rates.index]).dropna()
        summary = rates.rename(config.WIN_RATE).rename_axis("Player").reset_index()
    else:
        summary = games.loc[games["plusMinusPoints"].notna(), ["Player", "gameDate", "plusMinusPoints"]]
        summary = summary.rename(columns={"plusMinusPoints": config.PLUS_MINUS})

    return summary[SUMMARY_COLUMNS[metric]].reset_index(drop=True)


def join_scatter(summary: pd.DataFrame, season_slice: pd.DataFrame) -> pd.DataFrame:
    ppg = points_per_game(season_slice).rename_axis("Player").reset_index()
    scatter = summary.merge(ppg, on="Player", how="left")
    scatter["point_id"] = np.arange(len(scatter))

    value_cols = [c for c in summary.columns if c != "Player"]
    return scatter[["point_id", "Player", "ppg"] + value_cols]


def cumulative_win_rate(
    season_slice: pd.DataFrame,
    players: Sequence[str],
    metric: str = config.WIN_RATE,
) -> pd.DataFrame:
    check_metric(metric)
    players = _unique(players)
    if metric != config.WIN_RATE or not players:
        return pd.DataFrame(columns=TREND_COLUMNS)

    games = season_slice.loc[season_slice["Player"].isin(players), ["Player", "gameDate", "win"]]
    rank = pd.Categorical(games["Player"], categories=players, ordered=True).codes
    games = games.assign(_rank=rank).sort_values(["_rank", "gameDate"], kind="stable")

    by_player = games["Player"]
    wins_so_far = games["win"].fillna(0.0).groupby(by_player, sort=False).cumsum()
    counted = games["win"].notna().astype(int).groupby(by_player, sort=False).cumsum()

    trend = pd.DataFrame(
        {
            "Player": games["Player"],
            "gameDate": games["gameDate"],
            "game_number": games.groupby("Player", sort=False).cumcount() + 1,
            "cumulative_win_rate": wins_so_far / counted.where(counted > 0),
        }
    )
    return trend.reset_index(drop=True)


# =========================
# WIRING
# =========================
class DashboardViews(NamedTuple):
    season: int
    metric: str
    top_players: list
    players: list
    summary: pd.DataFrame
    scatter: pd.DataFrame
    trend: pd.DataFrame


def build_views(
    games: pd.DataFrame,
    season: int,
    metric: str,
    players: Optional[Sequence[str]] = None,
) -> DashboardViews:
    """
    Run the whole pipeline for one (season, metric, players) choice.

    ``players=None`` selects every top scorer. Names outside the season's top
    scorers are ignored, and the selection is kept in ranking order.
    """
    check_metric(metric)
    season_slice = filter_season(games, season)
    top = top_scorers(season_slice)

    if players is None:
        selected = list(top)
    else:
        chosen = set(players)
        selected = [p for p in top if p in chosen]

    summary = summarize_metric(season_slice, metric, selected)
    scatter = join_scatter(summary, season_slice)
    trend = cumulative_win_rate(season_slice, selected, metric)

    if season_slice.empty:
        log.info("season_slice_empty", season=int(season))
    log.debug(
        "views_computed",
        season=int(season),
        metric=metric,
        games=len(season_slice),
        players=len(selected),
        summary_rows=len(summary),
        trend_rows=len(trend),
    )
    return DashboardViews(int(season), metric, top, selected, summary, scatter, trend)


class DashboardData:
    """
    The loaded games table plus memoized views.

    The games frame is shared read-only across every view; cached frames must
    not be mutated by callers.
    """

    def __init__(self, games: pd.DataFrame, cache_size: int = 256):
        self.games = games
        self._views = functools.lru_cache(maxsize=cache_size)(self._compute_views)

    @classmethod
    def from_csv(cls, path) -> "DashboardData":
        return cls(load_games(path))

    def seasons(self) -> list:
        regular = self.games.loc[self.games["gameType"] == config.REGULAR_SEASON, "season"]
        return sorted(int(s) for s in regular.unique())

    def views(self, season: int, metric: str, players: Optional[Sequence[str]] = None) -> DashboardViews:
        check_metric(metric)
        key = None if players is None else tuple(sorted(set(players)))
        return self._views(int(season), metric, key)

    def _compute_views(self, season, metric, players):
        return build_views(self.games, season, metric, None if players is None else list(players))
