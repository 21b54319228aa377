from __future__ import annotations

import pytest

from overlay_tooltip.placement_policy import automatic_vertical_direction, resolve_placement
from overlay_tooltip.position_solver import solve_panel_geometry
from overlay_tooltip.tooltip_model import ArrowSpec, Direction, Point, ScreenMetrics, SizeConstraints

SCREEN = ScreenMetrics(400.0, 800.0)


def test_automatic_direction_opens_up_below_centre():
    placement = resolve_placement(
        Direction.DOWN, Point(200.0, 700.0), SCREEN, SizeConstraints(), automatic_direction=True
    )

    assert placement.direction is Direction.UP


def test_automatic_direction_opens_down_at_or_above_centre():
    assert automatic_vertical_direction(Point(200.0, 400.0), SCREEN) is Direction.DOWN
    assert automatic_vertical_direction(Point(200.0, 10.0), SCREEN) is Direction.DOWN


def test_direction_kept_without_policies():
    constraints = SizeConstraints(top=5.0)
    placement = resolve_placement(Direction.LEFT, Point(200.0, 700.0), SCREEN, constraints)

    assert placement.direction is Direction.LEFT
    assert placement.constraints is constraints


def test_snap_vertically_above_centre_fills_band_below_anchor():
    constraints = SizeConstraints(max_height=100.0, left=40.0, right=40.0)
    placement = resolve_placement(
        Direction.UP, Point(200.0, 100.0), SCREEN, constraints, snap_vertically=True
    )

    assert placement.direction is Direction.DOWN
    assert placement.constraints.left == 0.0
    assert placement.constraints.right == 0.0
    assert placement.constraints.bottom == 0.0
    assert placement.constraints.max_height is None

    geometry = solve_panel_geometry(
        placement.direction, Point(200.0, 100.0), SCREEN, placement.constraints, ArrowSpec()
    )
    assert geometry.width == pytest.approx(400.0)
    assert geometry.top == pytest.approx(100.0)
    assert geometry.bottom == pytest.approx(800.0)


def test_snap_vertically_below_centre_opens_up_to_top_edge():
    placement = resolve_placement(
        Direction.DOWN, Point(200.0, 700.0), SCREEN, SizeConstraints(), snap_vertically=True
    )

    assert placement.direction is Direction.UP
    assert placement.constraints.top == 0.0
    assert placement.constraints.bottom is None


@pytest.mark.parametrize(
    "anchor_x, expected, flush_side",
    [(100.0, Direction.RIGHT, "right"), (300.0, Direction.LEFT, "left")],
)
def test_snap_horizontally_picks_wider_side(anchor_x, expected, flush_side):
    placement = resolve_placement(
        Direction.DOWN,
        Point(anchor_x, 400.0),
        SCREEN,
        SizeConstraints(max_width=50.0),
        snap_horizontally=True,
    )

    assert placement.direction is expected
    assert placement.constraints.top == 0.0
    assert placement.constraints.bottom == 0.0
    assert placement.constraints.max_width is None
    assert getattr(placement.constraints, flush_side) == 0.0


def test_snap_vertically_takes_priority_over_horizontal():
    placement = resolve_placement(
        Direction.DOWN,
        Point(100.0, 100.0),
        SCREEN,
        SizeConstraints(),
        snap_vertically=True,
        snap_horizontally=True,
    )

    assert placement.direction is Direction.DOWN
    assert placement.constraints.top is None


def test_snap_overrides_automatic_direction():
    placement = resolve_placement(
        Direction.DOWN,
        Point(100.0, 700.0),
        SCREEN,
        SizeConstraints(),
        automatic_direction=True,
        snap_horizontally=True,
    )

    assert placement.direction is Direction.RIGHT


def test_caller_constraints_are_left_untouched():
    constraints = SizeConstraints(max_height=100.0)
    resolve_placement(Direction.DOWN, Point(200.0, 100.0), SCREEN, constraints, snap_vertically=True)

    assert constraints == SizeConstraints(max_height=100.0)
