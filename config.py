"""
Configuration settings and constants for the top-scorer impact dashboard.

Anything deployment-specific can be overridden through environment variables.
"""

import os

# =========================
# DATA
# =========================
DATA_PATH = os.environ.get("NBA_DATA_PATH", "PlayerStatistics.csv")

REQUIRED_COLUMNS = [
    "firstName",
    "lastName",
    "gameDate",
    "gameType",
    "points",
    "win",
    "plusMinusPoints",
]

REGULAR_SEASON = "Regular Season"

# games from October onward belong to the season starting that year
SEASON_START_MONTH = 10

MIN_SEASON = 2000
MAX_SEASON = 2024
DEFAULT_SEASON = MAX_SEASON

TOP_N = 10

# =========================
# METRICS
# =========================
WIN_RATE = "win_rate"
PLUS_MINUS = "plus_minus"

METRIC_LABELS = {
    WIN_RATE: "Win Rate",
    PLUS_MINUS: "Plus/Minus",
}

# hover snaps to the nearest point within this distance (axis-normalised units)
HOVER_THRESHOLD = 0.05

# =========================
# SERVER / LOGGING
# =========================
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 8080))
DEBUG = os.environ.get("DASH_DEBUG", "false").lower() in {"1", "true", "yes"}

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "console")  # "console" or "json"

# =========================
# THEME
# =========================
APP_BG = "#f3f5f9"
CARD_BG = "#ffffff"
PLOT_BG = "#ffffff"
PAPER_BG = "#ffffff"

TITLE_BLUE = "#1f4fd8"
AXIS_RED = "#8b0000"
TEXT_DARK = "#222222"
LIGHTGREY = "#666666"
GRID = "rgba(0,0,0,0.10)"

BODY_FONT = "'Lato', Arial, sans-serif"
