import dash_bootstrap_components as dbc
from dash import Dash, Input, Output, ctx, dash_table, dcc, html

import config
from charts import empty_figure, scatter_figure, summary_figure, trend_figure
from config import BODY_FONT, CARD_BG, GRID, LIGHTGREY, TEXT_DARK, TITLE_BLUE
from log import get_logger, setup_logging
from pipeline import DashboardData, GameDataError
from selection import point_from_hover, points_from_selection, selection_records

setup_logging(config.LOG_LEVEL, json_format=config.LOG_FORMAT == "json")
log = get_logger("app")


def card(*children):
    return html.Div(
        list(children),
        style={
            "background": CARD_BG,
            "boxShadow": "0 3px 10px rgba(0,0,0,0.12)",
            "border": f"2px solid {TITLE_BLUE}",
            "borderRadius": "14px",
            "padding": "12px 14px",
            "margin": "10px 0",
        },
    )


def label(text):
    return html.Label(text, style={"color": TEXT_DARK, "fontFamily": BODY_FONT, "fontWeight": "700"})


# =========================
# LOAD DATA
# =========================
try:
    dashboard = DashboardData.from_csv(config.DATA_PATH)
except (FileNotFoundError, GameDataError) as exc:
    log.critical("games_load_failed", path=config.DATA_PATH, error=str(exc))
    raise

available = [s for s in dashboard.seasons() if config.MIN_SEASON <= s <= config.MAX_SEASON]
START_SEASON = config.DEFAULT_SEASON if config.DEFAULT_SEASON in available or not available else available[-1]
log.info("seasons_available", count=len(available), start_season=START_SEASON)

slider_marks = {y: str(y) for y in range(config.MIN_SEASON, config.MAX_SEASON + 1, 4)}

external_stylesheets = [
    dbc.themes.BOOTSTRAP,
    "https://fonts.googleapis.com/css2?family=Lato:wght@300;400;700&display=swap",
]

my_app = Dash(__name__, external_stylesheets=external_stylesheets)
server = my_app.server
my_app.title = "NBA Top Scorers: Impact Beyond Points"


# =========================
# LAYOUT
# =========================
header = html.Div(
    [
        html.H1(
            "NBA Top Scorers: Impact Beyond Points",
            style={"color": TITLE_BLUE, "fontFamily": "serif", "fontWeight": "bold", "margin": "0"},
        ),
        html.Div(
            "Do the league's ten best scorers actually win? Pick a season and a metric, then brush the scatter.",
            style={"color": TEXT_DARK, "opacity": 0.9, "fontFamily": "serif", "marginTop": "2px"},
        ),
    ],
    style={
        "display": "flex",
        "flexDirection": "column",
        "padding": "10px 20px",
        "backgroundColor": "#ffffff",
        "borderBottom": f"3px solid {TITLE_BLUE}",
    },
)

controls = card(
    html.Div(
        [
            label("Season (start year)"),
            dcc.Slider(
                id="season",
                min=config.MIN_SEASON,
                max=config.MAX_SEASON,
                step=1,
                value=START_SEASON,
                marks=slider_marks,
                tooltip={"placement": "bottom", "always_visible": True},
            ),
        ],
        style={"marginBottom": "14px"},
    ),
    html.Div(
        [
            label("Metric"),
            dcc.RadioItems(
                id="metric",
                options=[{"label": f" {v}", "value": k} for k, v in config.METRIC_LABELS.items()],
                value=config.WIN_RATE,
                inputStyle={"marginRight": "6px"},
                labelStyle={"marginRight": "16px"},
                style={"color": TEXT_DARK, "fontFamily": BODY_FONT},
            ),
        ],
        style={"marginBottom": "14px"},
    ),
    html.Div(
        [
            label("Players (top 10 scorers by PPG)"),
            dcc.Checklist(
                id="player-select",
                options=[],
                value=[],
                inputStyle={"marginRight": "6px"},
                labelStyle={"display": "block"},
                style={"color": TEXT_DARK, "fontFamily": BODY_FONT},
            ),
        ]
    ),
)

brushed_table = dash_table.DataTable(
    id="brushed-table",
    columns=[],
    data=[],
    page_size=12,
    sort_action="native",
    style_table={"overflowX": "auto", "background": "#ffffff", "border": "1px solid #dddddd"},
    style_header={
        "backgroundColor": "#f0f4ff",
        "color": TITLE_BLUE,
        "fontWeight": "700",
        "fontFamily": "serif",
        "border": "1px solid #dddddd",
    },
    style_cell={
        "fontFamily": "serif",
        "fontSize": 12,
        "color": TEXT_DARK,
        "backgroundColor": "#ffffff",
        "border": "1px solid #dddddd",
        "whiteSpace": "nowrap",
        "textOverflow": "ellipsis",
    },
)

my_app.layout = html.Div(
    style={"minHeight": "100vh", "backgroundColor": config.APP_BG},
    children=[
        header,
        dbc.Container(
            [
                dbc.Row(
                    [
                        dbc.Col(controls, md=3),
                        dbc.Col(card(dcc.Graph(id="summary-fig")), md=9),
                    ]
                ),
                dbc.Row(
                    [
                        dbc.Col(
                            card(
                                dcc.Graph(id="scatter-fig"),
                                html.Div(id="hover-info", style={"fontFamily": BODY_FONT, "color": TEXT_DARK, "minHeight": "24px"}),
                            ),
                            md=6,
                        ),
                        dbc.Col(card(dcc.Graph(id="trend-fig")), md=6),
                    ]
                ),
                card(
                    html.H4("Brushed Points", style={"fontFamily": "serif", "color": TITLE_BLUE}),
                    html.Small(
                        "Drag a box or lasso on the scatter to list the points here.",
                        style={"fontFamily": BODY_FONT, "color": LIGHTGREY},
                    ),
                    brushed_table,
                ),
                html.Div(
                    f"Regular-season games only. Seasons {config.MIN_SEASON}-{config.MAX_SEASON}.",
                    style={
                        "textAlign": "center",
                        "color": LIGHTGREY,
                        "fontFamily": BODY_FONT,
                        "padding": "10px 0",
                        "opacity": 0.9,
                        "borderTop": f"1px solid {GRID}",
                    },
                ),
            ],
            fluid=True,
        ),
    ],
)


# =========================
# CALLBACKS
# =========================
@my_app.callback(
    Output("player-select", "options"),
    Output("player-select", "value"),
    Input("season", "value"),
)
def update_player_choices(season):
    if season is None:
        return [], []
    top = dashboard.views(season, config.WIN_RATE).top_players
    return [{"label": f" {p}", "value": p} for p in top], list(top)


@my_app.callback(
    Output("summary-fig", "figure"),
    Output("scatter-fig", "figure"),
    Output("trend-fig", "figure"),
    Input("season", "value"),
    Input("metric", "value"),
    Input("player-select", "value"),
)
def update_charts(season, metric, players):
    if season is None or metric is None:
        placeholder = empty_figure("Pick a season and a metric.")
        return placeholder, placeholder, placeholder

    views = dashboard.views(season, metric, players or [])
    return (
        summary_figure(views.summary, metric, views.season),
        scatter_figure(views.scatter, metric),
        trend_figure(views.trend, metric),
    )


@my_app.callback(
    Output("hover-info", "children"),
    Input("scatter-fig", "hoverData"),
    Input("season", "value"),
    Input("metric", "value"),
    Input("player-select", "value"),
)
def update_hover_info(hover_data, season, metric, players):
    if ctx.triggered_id != "scatter-fig" or season is None or metric is None:
        return ""

    views = dashboard.views(season, metric, players or [])
    point = point_from_hover(views.scatter, hover_data, y=metric)
    if point is None:
        return ""

    text = f"{point['Player']}: {point['ppg']:.2f} PPG, {config.METRIC_LABELS[metric]} {point[metric]:.3f}"
    if "gameDate" in point.index:
        text += f" on {point['gameDate']:%Y-%m-%d}"
    return text


@my_app.callback(
    Output("brushed-table", "columns"),
    Output("brushed-table", "data"),
    Input("scatter-fig", "selectedData"),
    Input("season", "value"),
    Input("metric", "value"),
    Input("player-select", "value"),
)
def update_brushed_table(selected_data, season, metric, players):
    if season is None or metric is None:
        return [], []

    y_name = config.METRIC_LABELS[metric]
    columns = [{"name": "Player", "id": "Player"}, {"name": "PPG", "id": "ppg"}, {"name": y_name, "id": metric}]
    if metric == config.PLUS_MINUS:
        columns.append({"name": "Game Date", "id": "gameDate"})

    # a stale brush from the previous chart does not carry over
    if ctx.triggered_id != "scatter-fig":
        return columns, []

    views = dashboard.views(season, metric, players or [])
    brushed = points_from_selection(views.scatter, selected_data, y=metric)
    log.debug("points_brushed", season=views.season, metric=metric, count=len(brushed))
    return columns, selection_records(brushed, y=metric)


if __name__ == "__main__":
    my_app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT)
