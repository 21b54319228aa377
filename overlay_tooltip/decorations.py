"""Panel margins and close-button placement around the bubble body (pure, no Qt)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from overlay_tooltip.errors import unsupported_direction
from overlay_tooltip.path_commands import PaintOp, StrokePath, polyline
from overlay_tooltip.tooltip_model import ArrowSpec, CloseButtonMode, Direction, PanelGeometry, Point, Rect

# Presentation tuning for the close button, measured from the panel's top-right corner.
CLOSE_BUTTON_CLICK_PADDING = 2.0
CLOSE_BUTTON_OUTSIDE_GAP = 5.0
CLOSE_BUTTON_TOP_INSIDE = 2.0
CLOSE_BUTTON_TOP_OUTSIDE = 0.0
CLOSE_BUTTON_RIGHT_UP_OR_RIGHT = 5.0
CLOSE_BUTTON_RIGHT_DOWN = 2.0
CLOSE_BUTTON_ARROW_GAP_LEFT = 3.0
CLOSE_BUTTON_ARROW_GAP_DOWN = 2.0


@dataclass(frozen=True)
class EdgeInsets:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


def panel_margins(
    direction: Direction,
    arrow: ArrowSpec,
    close_button: CloseButtonMode = CloseButtonMode.NONE,
    close_button_size: float = 30.0,
) -> EdgeInsets:
    """Space between the panel box and the bubble body: arrow clearance plus an outside close button."""

    top = close_button_size + CLOSE_BUTTON_OUTSIDE_GAP if close_button is CloseButtonMode.OUTSIDE else 0.0
    clearance = arrow.clearance
    if direction is Direction.DOWN:
        return EdgeInsets(top=clearance)
    if direction is Direction.UP:
        return EdgeInsets(top=top, bottom=clearance)
    if direction is Direction.LEFT:
        return EdgeInsets(top=top, right=clearance)
    if direction is Direction.RIGHT:
        return EdgeInsets(top=top, left=clearance)
    unsupported_direction(direction)


def body_rect(panel: PanelGeometry, margins: EdgeInsets) -> Rect:
    return panel.rect.inset(left=margins.left, top=margins.top, right=margins.right, bottom=margins.bottom)


def close_button_rect(
    panel: PanelGeometry,
    direction: Direction,
    mode: CloseButtonMode,
    size: float,
    arrow: ArrowSpec,
) -> Optional[Rect]:
    """Tap target of the close button in screen coordinates, or None when hidden."""

    if mode is CloseButtonMode.NONE:
        return None
    inside = mode is CloseButtonMode.INSIDE
    if direction is Direction.LEFT:
        right = arrow.clearance + CLOSE_BUTTON_ARROW_GAP_LEFT
        top = CLOSE_BUTTON_TOP_INSIDE if inside else CLOSE_BUTTON_TOP_OUTSIDE
    elif direction in (Direction.RIGHT, Direction.UP):
        right = CLOSE_BUTTON_RIGHT_UP_OR_RIGHT
        top = CLOSE_BUTTON_TOP_INSIDE if inside else CLOSE_BUTTON_TOP_OUTSIDE
    elif direction is Direction.DOWN:
        right = CLOSE_BUTTON_RIGHT_DOWN
        top = arrow.clearance + CLOSE_BUTTON_ARROW_GAP_DOWN if inside else CLOSE_BUTTON_TOP_OUTSIDE
    else:
        unsupported_direction(direction)
    extent = size + 2 * CLOSE_BUTTON_CLICK_PADDING
    return Rect(panel.right - right - extent, panel.top + top, extent, extent)


def close_button_paint_ops(button: Rect, color: str, *, stroke_width: float = 2.0) -> List[PaintOp]:
    """Two crossing strokes inside the button's click padding."""

    pad = CLOSE_BUTTON_CLICK_PADDING + button.width * 0.2
    left, top = button.left + pad, button.top + pad
    right, bottom = button.right - pad, button.bottom - pad
    return [
        StrokePath(path=polyline([Point(left, top), Point(right, bottom)]), color=color, width=stroke_width),
        StrokePath(path=polyline([Point(left, bottom), Point(right, top)]), color=color, width=stroke_width),
    ]
