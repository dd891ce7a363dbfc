"""
Brush and hover queries over the scatter points.

The scatter chart plots points-per-game (``ppg``) against the active metric.
A brush keeps every point inside a rectangle (or the points Plotly reports for
a lasso); hovering snaps to the single nearest point within a threshold.
"""

from typing import Optional

import numpy as np
import pandas as pd

import config


def points_in_box(points: pd.DataFrame, x_range, y_range, x: str = "ppg", y: str = config.WIN_RATE) -> pd.DataFrame:
    x0, x1 = sorted(float(v) for v in x_range)
    y0, y1 = sorted(float(v) for v in y_range)
    # NaN coordinates never fall inside a box
    mask = points[x].between(x0, x1) & points[y].between(y0, y1)
    return points.loc[mask]


def nearest_point(
    points: pd.DataFrame,
    x_value: float,
    y_value: float,
    threshold: float = config.HOVER_THRESHOLD,
    x: str = "ppg",
    y: str = config.WIN_RATE,
) -> Optional[pd.Series]:
    """
    Closest point to (x_value, y_value), or None when nothing is within ``threshold``.

    Distances are measured after scaling each axis by the spread of the plotted
    data, so points-per-game and a 0-1 win rate weigh the same.
    """
    coords = points[[x, y]].astype(float)
    coords = coords.loc[coords.notna().all(axis=1)]
    if coords.empty:
        return None

    span = (coords.max() - coords.min()).replace(0, 1.0)
    distance = np.hypot((coords[x] - x_value) / span[x], (coords[y] - y_value) / span[y])

    best = distance.idxmin()
    if distance[best] > threshold:
        return None
    return points.loc[best]


def _point_id(point: dict) -> Optional[int]:
    custom = point.get("customdata")
    if isinstance(custom, (list, tuple)):
        custom = custom[0] if custom else None
    if custom is None:
        return None
    try:
        return int(custom)
    except (TypeError, ValueError):
        return None


def points_from_selection(points: pd.DataFrame, selected_data: Optional[dict], y: str, x: str = "ppg") -> pd.DataFrame:
    """Rows picked by a Dash ``selectedData`` payload (box range or lasso point list)."""
    if not selected_data:
        return points.iloc[0:0]

    box = selected_data.get("range") or {}
    if "x" in box and "y" in box:
        return points_in_box(points, box["x"], box["y"], x=x, y=y)

    ids = {_point_id(p) for p in selected_data.get("points", [])}
    ids.discard(None)
    return points.loc[points["point_id"].isin(ids)]


def point_from_hover(
    points: pd.DataFrame,
    hover_data: Optional[dict],
    y: str,
    x: str = "ppg",
    threshold: float = config.HOVER_THRESHOLD,
) -> Optional[pd.Series]:
    if not hover_data or not hover_data.get("points"):
        return None

    hovered = hover_data["points"][0]
    point_id = _point_id(hovered)
    if point_id is not None and "point_id" in points.columns:
        match = points.loc[points["point_id"] == point_id]
        if not match.empty:
            return match.iloc[0]

    if hovered.get("x") is None or hovered.get("y") is None:
        return None
    return nearest_point(points, float(hovered["x"]), float(hovered["y"]), threshold=threshold, x=x, y=y)


def selection_records(points: pd.DataFrame, y: str) -> list:
    """Table rows for brushed points, rounded for display."""
    cols = ["Player", "ppg", y] + (["gameDate"] if "gameDate" in points.columns else [])
    table = points[cols].copy()
    table["ppg"] = table["ppg"].round(2)
    table[y] = table[y].round(3)
    if "gameDate" in table.columns:
        table["gameDate"] = pd.to_datetime(table["gameDate"]).dt.strftime("%Y-%m-%d")
    return table.to_dict("records")
