"""Panel position/size solver for anchored tooltips (pure, no Qt)."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from overlay_tooltip.errors import unsupported_direction
from overlay_tooltip.tooltip_model import (
    AnchorPoint,
    ArrowSpec,
    Direction,
    PanelGeometry,
    ScreenMetrics,
    Size,
    SizeConstraints,
)

_LOGGER_NAME = "OverlayTooltip"
_TOOLTIP_LOGGER = logging.getLogger(_LOGGER_NAME)


@dataclass(frozen=True)
class AxisSpan:
    origin: float
    extent: float
    free: bool


def _floored(value: float, minimum: Optional[float]) -> float:
    return max(value, minimum if minimum is not None else 0.0, 0.0)


def _fit_extent(available: float, minimum: Optional[float], preferred: Optional[float]) -> float:
    value = available if preferred is None else min(float(preferred), available)
    return _floored(value, minimum)


def _primary_extent(
    *,
    forced: Optional[float],
    edge_distance: float,
    maximum: Optional[float],
    minimum: Optional[float],
    padding: float,
    preferred: Optional[float],
) -> float:
    if forced is not None:
        return max(0.0, forced)
    limit = math.inf if maximum is None else float(maximum)
    available = min(limit, edge_distance) - padding
    return _fit_extent(available, minimum, preferred)


def solve_cross_axis(
    *,
    near_offset: Optional[float],
    far_offset: Optional[float],
    screen_extent: float,
    anchor_coord: float,
    minimum: Optional[float],
    maximum: Optional[float],
    padding: float,
    preferred: Optional[float] = None,
) -> AxisSpan:
    """Resolve origin and extent along the axis perpendicular to the arrow."""

    limit = math.inf if maximum is None else float(maximum)
    if near_offset is not None and far_offset is not None:
        extent = max(0.0, screen_extent - (near_offset + far_offset))
        return AxisSpan(origin=near_offset, extent=extent, free=False)
    if near_offset is not None:
        extent = _fit_extent(min(limit, screen_extent - near_offset - padding), minimum, preferred)
        return AxisSpan(origin=near_offset, extent=extent, free=False)
    if far_offset is not None:
        extent = _fit_extent(min(limit, screen_extent - far_offset - padding), minimum, preferred)
        return AxisSpan(origin=screen_extent - far_offset - extent, extent=extent, free=False)
    extent = _fit_extent(min(limit, screen_extent - 2 * padding), minimum, preferred)
    origin = max(padding, min(anchor_coord - extent / 2.0, screen_extent - padding - extent))
    return AxisSpan(origin=origin, extent=extent, free=True)


def arrow_offset_shift(cross_extent: float, arrow: ArrowSpec, corner_radius: float) -> float:
    """Cross-axis shift keeping a corner-relative arrow on the anchor."""

    if arrow.centered or arrow.offset_from_corner is None:
        return 0.0
    from_corner = min(float(arrow.offset_from_corner), cross_extent)
    return cross_extent / 2.0 - from_corner - corner_radius - arrow.base_width / 2.0


def solve_panel_geometry(
    direction: Direction,
    anchor: AnchorPoint,
    screen: ScreenMetrics,
    constraints: SizeConstraints,
    arrow: ArrowSpec,
    *,
    corner_radius: float = 0.0,
    preferred_size: Optional[Size] = None,
) -> PanelGeometry:
    padding = constraints.outside_padding
    preferred_width = preferred_size.width if preferred_size is not None else None
    preferred_height = preferred_size.height if preferred_size is not None else None

    if direction in (Direction.UP, Direction.DOWN):
        cross = solve_cross_axis(
            near_offset=constraints.left,
            far_offset=constraints.right,
            screen_extent=screen.width,
            anchor_coord=anchor.x,
            minimum=constraints.min_width,
            maximum=constraints.max_width,
            padding=padding,
            preferred=preferred_width,
        )
        if direction is Direction.DOWN:
            forced = None if constraints.bottom is None else screen.height - constraints.bottom - anchor.y
            edge_distance = screen.height - anchor.y
        else:
            forced = None if constraints.top is None else anchor.y - constraints.top
            edge_distance = anchor.y
        height = _primary_extent(
            forced=forced,
            edge_distance=edge_distance,
            maximum=constraints.max_height,
            minimum=constraints.min_height,
            padding=padding,
            preferred=preferred_height,
        )
        left = cross.origin
        if cross.free:
            left += arrow_offset_shift(cross.extent, arrow, corner_radius)
        top = anchor.y if direction is Direction.DOWN else anchor.y - height
        geometry = PanelGeometry(left=left, top=top, width=cross.extent, height=height)
    elif direction in (Direction.LEFT, Direction.RIGHT):
        cross = solve_cross_axis(
            near_offset=constraints.top,
            far_offset=constraints.bottom,
            screen_extent=screen.height,
            anchor_coord=anchor.y,
            minimum=constraints.min_height,
            maximum=constraints.max_height,
            padding=padding,
            preferred=preferred_height,
        )
        if direction is Direction.RIGHT:
            forced = None if constraints.right is None else screen.width - constraints.right - anchor.x
            edge_distance = screen.width - anchor.x
        else:
            forced = None if constraints.left is None else anchor.x - constraints.left
            edge_distance = anchor.x
        width = _primary_extent(
            forced=forced,
            edge_distance=edge_distance,
            maximum=constraints.max_width,
            minimum=constraints.min_width,
            padding=padding,
            preferred=preferred_width,
        )
        top = cross.origin
        if cross.free:
            top += arrow_offset_shift(cross.extent, arrow, corner_radius)
        left = anchor.x if direction is Direction.RIGHT else anchor.x - width
        geometry = PanelGeometry(left=left, top=top, width=width, height=cross.extent)
    else:
        unsupported_direction(direction)

    _TOOLTIP_LOGGER.debug(
        "Solved tooltip geometry: direction=%s anchor=(%.1f,%.1f) screen=%.0fx%.0f -> (%.1f,%.1f,%.1f,%.1f)",
        direction.value,
        anchor.x,
        anchor.y,
        screen.width,
        screen.height,
        geometry.left,
        geometry.top,
        geometry.width,
        geometry.height,
    )
    return geometry
