import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

import config
from config import AXIS_RED, GRID, PAPER_BG, PLOT_BG, TEXT_DARK, TITLE_BLUE

PLAYER_COLORS = px.colors.qualitative.Set2 + px.colors.qualitative.Dark2


def style_fig_app(fig: go.Figure, x_title=None, y_title=None, x_format=None, y_format=".2f"):
    fig.update_layout(
        template="simple_white",
        paper_bgcolor=PAPER_BG,
        plot_bgcolor=PLOT_BG,
        title_font=dict(family="serif", size=22, color=TITLE_BLUE),
        font=dict(family="serif", size=14, color=TEXT_DARK),
        legend=dict(bgcolor="rgba(0,0,0,0)", font=dict(size=12)),
        margin=dict(l=60, r=40, t=80, b=60),
    )

    fig.update_xaxes(
        title_text=x_title,
        title_font=dict(family="serif", size=16, color=AXIS_RED),
        tickformat=x_format,
        showgrid=True,
        gridcolor=GRID,
        zeroline=False,
    )

    fig.update_yaxes(
        title_text=y_title,
        title_font=dict(family="serif", size=16, color=AXIS_RED),
        tickformat=y_format,
        showgrid=True,
        gridcolor=GRID,
        zeroline=False,
    )

    return fig


def empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, x=0.5, y=0.5, xref="paper", yref="paper", showarrow=False, font=dict(color=TEXT_DARK))
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(template="simple_white", paper_bgcolor=PAPER_BG, plot_bgcolor=PLOT_BG)
    return fig


def _player_order(df: pd.DataFrame) -> dict:
    return {"Player": list(dict.fromkeys(df["Player"]))}


def summary_figure(summary: pd.DataFrame, metric: str, season: int) -> go.Figure:
    label = config.METRIC_LABELS[metric]
    if summary.empty:
        return empty_figure(f"No regular-season games for the selected players in {season}.")

    if metric == config.WIN_RATE:
        fig = px.bar(
            summary,
            x="Player",
            y=config.WIN_RATE,
            color="Player",
            category_orders=_player_order(summary),
            color_discrete_sequence=PLAYER_COLORS,
            title=f"{label} of Top Scorers, {season}-{str(season + 1)[-2:]}",
        )
        fig.update_traces(texttemplate="%{y:.3f}", textposition="outside")
        style_fig_app(fig, x_title="", y_title=label, y_format=".2f")
        fig.update_yaxes(range=[0, 1.1])
    else:
        fig = px.box(
            summary,
            x="Player",
            y=config.PLUS_MINUS,
            color="Player",
            points="all",
            category_orders=_player_order(summary),
            color_discrete_sequence=PLAYER_COLORS,
            title=f"Per-Game {label} of Top Scorers, {season}-{str(season + 1)[-2:]}",
        )
        style_fig_app(fig, x_title="", y_title=label, y_format="d")

    fig.update_layout(showlegend=False)
    return fig


def scatter_figure(scatter: pd.DataFrame, metric: str) -> go.Figure:
    label = config.METRIC_LABELS[metric]
    if scatter.empty:
        return empty_figure("Nothing to plot. Pick a season and at least one player.")

    fig = px.scatter(
        scatter,
        x="ppg",
        y=metric,
        color="Player",
        custom_data=["point_id"],
        hover_name="Player",
        hover_data={"ppg": ":.2f", metric: ":.3f", "Player": False},
        category_orders=_player_order(scatter),
        color_discrete_sequence=PLAYER_COLORS,
        title=f"Points per Game vs {label}",
    )
    fig.update_traces(marker=dict(size=11, opacity=0.8, line=dict(width=1, color="#ffffff")))
    style_fig_app(fig, x_title="Points per Game", y_title=label, x_format=".1f", y_format=".2f" if metric == config.WIN_RATE else "d")
    fig.update_layout(dragmode="select", clickmode="event+select", hovermode="closest")
    return fig


def trend_figure(trend: pd.DataFrame, metric: str) -> go.Figure:
    if metric != config.WIN_RATE:
        return empty_figure("The cumulative trend is available for Win Rate only.")
    if trend.empty:
        return empty_figure("No games to trace for the selected players.")

    fig = px.line(
        trend,
        x="gameDate",
        y="cumulative_win_rate",
        color="Player",
        markers=True,
        hover_data={"game_number": True, "cumulative_win_rate": ":.3f"},
        category_orders=_player_order(trend),
        color_discrete_sequence=PLAYER_COLORS,
        title="Cumulative Win Rate Through the Season",
    )
    fig.update_traces(line=dict(width=2), marker=dict(size=4))
    style_fig_app(fig, x_title="Game Date", y_title="Cumulative Win Rate", y_format=".2f")
    fig.update_yaxes(range=[0, 1.05])
    return fig
