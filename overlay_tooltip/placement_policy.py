"""Auto-direction and snap policies resolved before solving panel geometry."""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from overlay_tooltip.tooltip_model import AnchorPoint, Direction, ScreenMetrics, SizeConstraints

_TOOLTIP_LOGGER = logging.getLogger("OverlayTooltip")


@dataclass(frozen=True)
class ResolvedPlacement:
    direction: Direction
    constraints: SizeConstraints


def automatic_vertical_direction(anchor: AnchorPoint, screen: ScreenMetrics) -> Direction:
    if anchor.y > screen.center.y:
        return Direction.UP
    return Direction.DOWN


def resolve_placement(
    direction: Direction,
    anchor: AnchorPoint,
    screen: ScreenMetrics,
    constraints: SizeConstraints,
    *,
    automatic_direction: bool = False,
    snap_vertically: bool = False,
    snap_horizontally: bool = False,
) -> ResolvedPlacement:
    """Apply auto-direction, then at most one snap mode (vertical wins).

    Snapping overrides the configured offsets so the panel covers the whole free
    band on the far side of the anchor. The passed constraints are not modified.
    """

    if automatic_direction:
        direction = automatic_vertical_direction(anchor, screen)

    center = screen.center
    if snap_vertically:
        constraints = dataclasses.replace(constraints, max_height=None, left=0.0, right=0.0)
        if anchor.y > center.y:
            direction = Direction.UP
            constraints = dataclasses.replace(constraints, top=0.0)
        else:
            direction = Direction.DOWN
            constraints = dataclasses.replace(constraints, bottom=0.0)
    elif snap_horizontally:
        constraints = dataclasses.replace(constraints, max_width=None, top=0.0, bottom=0.0)
        if anchor.x < center.x:
            direction = Direction.RIGHT
            constraints = dataclasses.replace(constraints, right=0.0)
        else:
            direction = Direction.LEFT
            constraints = dataclasses.replace(constraints, left=0.0)

    _TOOLTIP_LOGGER.debug(
        "Resolved tooltip placement: direction=%s auto=%s snap_v=%s snap_h=%s offsets=(t=%s r=%s b=%s l=%s)",
        direction.value,
        automatic_direction,
        snap_vertically,
        snap_horizontally,
        constraints.top,
        constraints.right,
        constraints.bottom,
        constraints.left,
    )
    return ResolvedPlacement(direction=direction, constraints=constraints)
