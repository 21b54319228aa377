"""Bubble outline construction: rounded rectangle with an arrow notch (pure, no Qt)."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from overlay_tooltip.errors import unsupported_direction
from overlay_tooltip.path_commands import (
    ArcTo,
    ClosePath,
    FillPath,
    LineTo,
    MoveTo,
    OutlinePath,
    PaintOp,
    PathElement,
    StrokePath,
    polyline,
)
from overlay_tooltip.tooltip_model import (
    AnchorPoint,
    ArrowSpec,
    CornerRadii,
    Direction,
    Point,
    Rect,
    ShadowSpec,
    SizeConstraints,
)


class Edge(Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


@dataclass(frozen=True)
class Notch:
    """Arrow notch on ``edge``; base coordinates run along that edge, base_start <= base_end."""

    edge: Edge
    base_start: float
    base_end: float
    apex: Point


def _is_flush(offset: Optional[float]) -> bool:
    return offset is not None and offset == 0


def resolve_corner_radii(radius: float, constraints: SizeConstraints) -> CornerRadii:
    """Drop rounding on every corner that touches a flush (zero offset) edge."""

    top = _is_flush(constraints.top)
    right = _is_flush(constraints.right)
    bottom = _is_flush(constraints.bottom)
    left = _is_flush(constraints.left)
    return CornerRadii(
        top_left=0.0 if (left or top) else radius,
        top_right=0.0 if (right or top) else radius,
        bottom_right=0.0 if (right or bottom) else radius,
        bottom_left=0.0 if (left or bottom) else radius,
    )


def fit_corner_radii(body: Rect, radii: CornerRadii) -> CornerRadii:
    limit = max(0.0, min(body.width, body.height) / 2.0)
    return CornerRadii(
        top_left=min(max(0.0, radii.top_left), limit),
        top_right=min(max(0.0, radii.top_right), limit),
        bottom_right=min(max(0.0, radii.bottom_right), limit),
        bottom_left=min(max(0.0, radii.bottom_left), limit),
    )


def notch_edge(direction: Direction) -> Edge:
    if direction is Direction.DOWN:
        return Edge.TOP
    if direction is Direction.UP:
        return Edge.BOTTOM
    if direction is Direction.LEFT:
        return Edge.RIGHT
    if direction is Direction.RIGHT:
        return Edge.LEFT
    unsupported_direction(direction)


def leading_corner_radius(radii: CornerRadii, direction: Direction) -> float:
    """Radius of the corner a corner-offset arrow is measured from."""

    edge = notch_edge(direction)
    if edge is Edge.BOTTOM:
        return radii.bottom_left
    if edge is Edge.RIGHT:
        return radii.top_right
    return radii.top_left


def _edge_span(body: Rect, radii: CornerRadii, edge: Edge) -> Tuple[float, float]:
    if edge is Edge.TOP:
        start, end = body.left + radii.top_left, body.right - radii.top_right
    elif edge is Edge.BOTTOM:
        start, end = body.left + radii.bottom_left, body.right - radii.bottom_right
    elif edge is Edge.RIGHT:
        start, end = body.top + radii.top_right, body.bottom - radii.bottom_right
    else:
        start, end = body.top + radii.top_left, body.bottom - radii.bottom_left
    if end < start:
        middle = (start + end) / 2.0
        return middle, middle
    return start, end


def centered_base(span_start: float, span_end: float, anchor_coord: float, base_width: float) -> Tuple[float, float]:
    half = base_width / 2.0
    start = max(min(anchor_coord - half, span_end - base_width), span_start)
    end = min(max(anchor_coord + half, span_start + base_width), span_end)
    return start, end


def corner_offset_base(
    span_start: float, span_end: float, offset_from_corner: float, base_width: float
) -> Tuple[float, float]:
    start = max(span_start, min(span_start + offset_from_corner, span_end - base_width))
    end = min(span_end, span_start + offset_from_corner + base_width)
    return start, end


def build_notch(
    body: Rect,
    direction: Direction,
    anchor: AnchorPoint,
    radii: CornerRadii,
    arrow: ArrowSpec,
) -> Notch:
    edge = notch_edge(direction)
    span_start, span_end = _edge_span(body, radii, edge)
    along_anchor = anchor.x if edge in (Edge.TOP, Edge.BOTTOM) else anchor.y

    if arrow.centered:
        base_start, base_end = centered_base(span_start, span_end, along_anchor, arrow.base_width)
        along_apex = min(max(along_anchor, span_start), span_end)
    else:
        offset = float(arrow.offset_from_corner or 0.0)
        base_start, base_end = corner_offset_base(span_start, span_end, offset, arrow.base_width)
        along_apex = (base_start + base_end) / 2.0

    if edge is Edge.TOP:
        apex = Point(along_apex, anchor.y + arrow.tip_distance)
    elif edge is Edge.BOTTOM:
        apex = Point(along_apex, anchor.y - arrow.tip_distance)
    elif edge is Edge.RIGHT:
        apex = Point(anchor.x - arrow.tip_distance, along_apex)
    else:
        apex = Point(anchor.x + arrow.tip_distance, along_apex)
    return Notch(edge=edge, base_start=base_start, base_end=base_end, apex=apex)


def _notch_run(notch: Notch, edge: Edge, fixed: float, reverse: bool) -> List[PathElement]:
    if notch.edge is not edge:
        return []
    first, last = (notch.base_end, notch.base_start) if reverse else (notch.base_start, notch.base_end)
    if edge in (Edge.TOP, Edge.BOTTOM):
        return [LineTo(Point(first, fixed)), LineTo(notch.apex), LineTo(Point(last, fixed))]
    return [LineTo(Point(fixed, first)), LineTo(notch.apex), LineTo(Point(fixed, last))]


def _corner_arc(center: Point, radius: float, start_angle: float) -> List[PathElement]:
    if radius <= 0.0:
        return []
    return [ArcTo(center=center, radius=radius, start_angle=start_angle, sweep_angle=-90.0)]


def build_bubble_outline(
    body: Rect,
    direction: Direction,
    anchor: AnchorPoint,
    radii: CornerRadii,
    arrow: ArrowSpec,
) -> OutlinePath:
    """Single closed clockwise contour starting where the top-left corner ends."""

    radii = fit_corner_radii(body, radii)
    notch = build_notch(body, direction, anchor, radii, arrow)
    left, top, right, bottom = body.left, body.top, body.right, body.bottom
    tl, tr, br, bl = radii.top_left, radii.top_right, radii.bottom_right, radii.bottom_left

    elements: List[PathElement] = [MoveTo(Point(left + tl, top))]
    elements += _notch_run(notch, Edge.TOP, top, reverse=False)
    elements.append(LineTo(Point(right - tr, top)))
    elements += _corner_arc(Point(right - tr, top + tr), tr, 90.0)
    elements += _notch_run(notch, Edge.RIGHT, right, reverse=False)
    elements.append(LineTo(Point(right, bottom - br)))
    elements += _corner_arc(Point(right - br, bottom - br), br, 0.0)
    elements += _notch_run(notch, Edge.BOTTOM, bottom, reverse=True)
    elements.append(LineTo(Point(left + bl, bottom)))
    elements += _corner_arc(Point(left + bl, bottom - bl), bl, 270.0)
    elements += _notch_run(notch, Edge.LEFT, left, reverse=True)
    elements.append(LineTo(Point(left, top + tl)))
    elements += _corner_arc(Point(left + tl, top + tl), tl, 180.0)
    elements.append(ClosePath())
    return OutlinePath(tuple(elements))


def flush_edge_segments(body: Rect, constraints: SizeConstraints, border_width: float) -> List[OutlinePath]:
    """Edge strokes that hide the border where the panel is pinned to the screen edge."""

    top = _is_flush(constraints.top)
    right = _is_flush(constraints.right)
    bottom = _is_flush(constraints.bottom)
    left = _is_flush(constraints.left)
    inset = border_width / 2.0
    segments: List[OutlinePath] = []

    if right:
        trim = 0.0 if (top and bottom) else inset
        segments.append(polyline([Point(body.right, body.top + trim), Point(body.right, body.bottom - trim)]))
    if left:
        trim = 0.0 if (top and bottom) else inset
        segments.append(polyline([Point(body.left, body.top + trim), Point(body.left, body.bottom - trim)]))
    if top:
        trim = 0.0 if (left and right) else inset
        segments.append(polyline([Point(body.right - trim, body.top), Point(body.left + trim, body.top)]))
    if bottom:
        trim = 0.0 if (left and right) else inset
        segments.append(polyline([Point(body.right - trim, body.bottom), Point(body.left + trim, body.bottom)]))
    return segments


def build_bubble_paint_ops(
    outline: OutlinePath,
    body: Rect,
    constraints: SizeConstraints,
    *,
    background_color: str,
    border_color: str,
    border_width: float,
    shadow: Optional[ShadowSpec] = None,
) -> List[PaintOp]:
    ops: List[PaintOp] = [FillPath(path=outline, color=background_color, shadow=shadow)]
    if border_width <= 0.0:
        return ops
    ops.append(StrokePath(path=outline, color=border_color, width=border_width))
    for segment in flush_edge_segments(body, constraints, border_width):
        ops.append(StrokePath(path=segment, color=background_color, width=border_width))
    return ops
