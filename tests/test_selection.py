import pandas as pd

import config
from selection import (
    nearest_point,
    point_from_hover,
    points_from_selection,
    points_in_box,
    selection_records,
)


def scatter_points():
    return pd.DataFrame(
        {
            "point_id": [0, 1, 2, 3],
            "Player": ["A", "B", "C", "D"],
            "ppg": [30.0, 25.0, 20.0, None],
            config.WIN_RATE: [0.70, 0.40, 0.55, 0.50],
        }
    )


def test_points_in_box_is_inclusive():
    inside = points_in_box(scatter_points(), [20, 25], [0.4, 0.6])
    assert inside["Player"].tolist() == ["B", "C"]


def test_points_in_box_accepts_reversed_ranges():
    inside = points_in_box(scatter_points(), [31, 26], [1.0, 0.0])
    assert inside["Player"].tolist() == ["A"]


def test_points_with_missing_coordinates_are_never_brushed():
    inside = points_in_box(scatter_points(), [0, 100], [0, 1])
    assert "D" not in inside["Player"].tolist()


def test_nearest_point_within_threshold():
    point = nearest_point(scatter_points(), 24.9, 0.41)
    assert point["Player"] == "B"


def test_nearest_point_too_far_away():
    assert nearest_point(scatter_points(), 27.5, 0.9) is None


def test_nearest_point_on_empty_points():
    assert nearest_point(scatter_points().iloc[0:0], 20, 0.5) is None


def test_selection_payload_with_box_range():
    selected = {"range": {"x": [19, 26], "y": [0.3, 0.6]}, "points": []}
    brushed = points_from_selection(scatter_points(), selected, y=config.WIN_RATE)
    assert brushed["Player"].tolist() == ["B", "C"]


def test_selection_payload_from_lasso_points():
    selected = {
        "lassoPoints": {"x": [1, 2, 3], "y": [1, 2, 3]},
        "points": [{"customdata": [2]}, {"customdata": [0]}, {"x": 1}],
    }
    brushed = points_from_selection(scatter_points(), selected, y=config.WIN_RATE)
    assert brushed["Player"].tolist() == ["A", "C"]


def test_empty_selection_payload():
    assert points_from_selection(scatter_points(), None, y=config.WIN_RATE).empty


def test_point_from_hover():
    hover = {"points": [{"x": 30.0, "y": 0.7, "customdata": [0]}]}
    assert point_from_hover(scatter_points(), hover, y=config.WIN_RATE)["Player"] == "A"
    assert point_from_hover(scatter_points(), {"points": []}, y=config.WIN_RATE) is None


def test_hover_uses_the_point_id_when_coordinates_collide():
    points = pd.DataFrame(
        {
            "point_id": [0, 1],
            "Player": ["A", "B"],
            "ppg": [25.0, 25.0],
            config.PLUS_MINUS: [0.5, 0.5],
        }
    )
    hover = {"points": [{"x": 25.0, "y": 0.5, "customdata": [1]}]}
    assert point_from_hover(points, hover, y=config.PLUS_MINUS)["Player"] == "B"


def test_hover_without_point_id_snaps_to_nearest():
    hover = {"points": [{"x": 20.1, "y": 0.55}]}
    assert point_from_hover(scatter_points(), hover, y=config.WIN_RATE)["Player"] == "C"


def test_selection_records_round_for_display():
    points = pd.DataFrame(
        {
            "point_id": [0],
            "Player": ["Y"],
            "ppg": [24.3333],
            config.PLUS_MINUS: [5.0],
            "gameDate": pd.to_datetime(["2023-11-01 19:30:00"]),
        }
    )
    records = selection_records(points, y=config.PLUS_MINUS)
    assert records == [{"Player": "Y", "ppg": 24.33, config.PLUS_MINUS: 5.0, "gameDate": "2023-11-01"}]
