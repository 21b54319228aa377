from __future__ import annotations

import pytest

from overlay_tooltip.errors import UnsupportedDirectionError
from overlay_tooltip.position_solver import arrow_offset_shift, solve_cross_axis, solve_panel_geometry
from overlay_tooltip.tooltip_model import ArrowSpec, Direction, Point, ScreenMetrics, Size, SizeConstraints

SCREEN = ScreenMetrics(400.0, 800.0)
ARROW = ArrowSpec()


def _solve(direction, anchor, constraints=None, **kwargs):
    return solve_panel_geometry(direction, anchor, SCREEN, constraints or SizeConstraints(), ARROW, **kwargs)


def test_down_panel_fills_space_below_anchor_minus_padding():
    geometry = _solve(Direction.DOWN, Point(200.0, 100.0))

    assert geometry.top == pytest.approx(100.0)
    assert geometry.height == pytest.approx(680.0)
    assert geometry.left == pytest.approx(20.0)
    assert geometry.width == pytest.approx(360.0)


@pytest.mark.parametrize("direction", list(Direction))
def test_panel_stays_inside_padded_screen(direction):
    geometry = _solve(direction, Point(200.0, 400.0))

    assert geometry.left >= 20.0 - 1e-9
    assert geometry.top >= 20.0 - 1e-9
    assert geometry.right <= 380.0 + 1e-9
    assert geometry.bottom <= 780.0 + 1e-9


@pytest.mark.parametrize("direction", list(Direction))
@pytest.mark.parametrize(
    "anchor",
    [Point(5.0, 5.0), Point(395.0, 795.0), Point(0.0, 400.0), Point(400.0, 0.0)],
)
def test_sizes_never_negative_near_edges(direction, anchor):
    geometry = _solve(direction, anchor, SizeConstraints(max_width=10.0, max_height=10.0))

    assert geometry.width >= 0.0
    assert geometry.height >= 0.0


def test_up_panel_bottom_edge_sits_on_anchor():
    geometry = _solve(Direction.UP, Point(200.0, 400.0))

    assert geometry.top == pytest.approx(20.0)
    assert geometry.bottom == pytest.approx(400.0)


def test_horizontal_directions_use_width_toward_screen_edge():
    right = _solve(Direction.RIGHT, Point(200.0, 400.0))
    left = _solve(Direction.LEFT, Point(200.0, 400.0))

    assert (right.left, right.width) == pytest.approx((200.0, 180.0))
    assert (left.left, left.width) == pytest.approx((20.0, 180.0))
    assert right.top == pytest.approx(20.0)
    assert right.height == pytest.approx(760.0)


def test_max_height_caps_primary_extent():
    geometry = _solve(Direction.DOWN, Point(200.0, 100.0), SizeConstraints(max_height=150.0))

    assert geometry.height == pytest.approx(130.0)


def test_min_height_wins_over_available_space():
    geometry = _solve(Direction.DOWN, Point(200.0, 700.0), SizeConstraints(min_height=300.0))

    assert geometry.height == pytest.approx(300.0)


def test_zero_offsets_pin_panel_to_screen_edges():
    geometry = _solve(Direction.DOWN, Point(200.0, 100.0), SizeConstraints(left=0.0, right=0.0, bottom=0.0))

    assert geometry.left == 0.0
    assert geometry.right == pytest.approx(400.0)
    assert geometry.bottom == pytest.approx(800.0)


def test_right_offset_alone_places_right_edge():
    geometry = _solve(Direction.UP, Point(300.0, 500.0), SizeConstraints(right=0.0))

    assert geometry.right == pytest.approx(400.0)
    assert geometry.width == pytest.approx(380.0)


def test_left_offset_alone_places_left_edge():
    geometry = _solve(Direction.DOWN, Point(300.0, 100.0), SizeConstraints(left=50.0))

    assert geometry.left == pytest.approx(50.0)
    assert geometry.width == pytest.approx(330.0)


def test_far_offset_forces_primary_extent():
    down = _solve(Direction.DOWN, Point(200.0, 100.0), SizeConstraints(bottom=50.0))
    up = _solve(Direction.UP, Point(200.0, 500.0), SizeConstraints(top=30.0))

    assert down.height == pytest.approx(650.0)
    assert up.top == pytest.approx(30.0)
    assert up.height == pytest.approx(470.0)


def test_preferred_size_shrinks_and_centres_on_anchor():
    geometry = _solve(Direction.DOWN, Point(200.0, 100.0), preferred_size=Size(100.0, 50.0))

    assert geometry.width == pytest.approx(100.0)
    assert geometry.left == pytest.approx(150.0)
    assert geometry.height == pytest.approx(50.0)


def test_corner_offset_arrow_shifts_panel_so_arrow_meets_anchor():
    arrow = ArrowSpec(centered=False, offset_from_corner=10.0)
    geometry = solve_panel_geometry(
        Direction.DOWN, Point(200.0, 100.0), SCREEN, SizeConstraints(), arrow, corner_radius=10.0
    )

    assert geometry.left == pytest.approx(170.0)
    assert geometry.left + 10.0 + 10.0 + arrow.base_width / 2.0 == pytest.approx(200.0)


def test_arrow_shift_is_zero_for_centered_arrow():
    assert arrow_offset_shift(300.0, ArrowSpec(), 10.0) == 0.0


def test_cross_axis_with_both_offsets_is_fixed():
    span = solve_cross_axis(
        near_offset=10.0,
        far_offset=30.0,
        screen_extent=400.0,
        anchor_coord=0.0,
        minimum=None,
        maximum=None,
        padding=20.0,
    )

    assert (span.origin, span.extent, span.free) == (10.0, 360.0, False)


def test_cross_axis_clamps_towards_padding_when_anchor_near_edge():
    span = solve_cross_axis(
        near_offset=None,
        far_offset=None,
        screen_extent=400.0,
        anchor_coord=390.0,
        minimum=None,
        maximum=100.0,
        padding=20.0,
    )

    assert span.free is True
    assert span.origin == pytest.approx(280.0)
    assert span.origin + span.extent == pytest.approx(380.0)


def test_unsupported_direction_raises():
    with pytest.raises(UnsupportedDirectionError):
        solve_panel_geometry("down", Point(0.0, 0.0), SCREEN, SizeConstraints(), ARROW)  # type: ignore[arg-type]
