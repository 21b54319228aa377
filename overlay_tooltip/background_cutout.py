"""Dimmed background region with an optional touch-through cutout (pure, no Qt)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from overlay_tooltip.path_commands import (
    ArcTo,
    ClosePath,
    Ellipse,
    FillPath,
    LineTo,
    MoveTo,
    OutlinePath,
    PaintOp,
    PathElement,
    PathPainterAdapter,
    render_paint_ops,
)
from overlay_tooltip.tooltip_model import CutoutShape, CutoutSpec, Point, Rect


def rect_path(rect: Rect) -> OutlinePath:
    return OutlinePath(
        (
            MoveTo(Point(rect.left, rect.top)),
            LineTo(Point(rect.right, rect.top)),
            LineTo(Point(rect.right, rect.bottom)),
            LineTo(Point(rect.left, rect.bottom)),
            LineTo(Point(rect.left, rect.top)),
            ClosePath(),
        )
    )


def _cutout_radius(rect: Rect, radius: float) -> float:
    return min(max(0.0, radius), rect.width / 2.0, rect.height / 2.0)


def rounded_rect_path(rect: Rect, radius: float) -> OutlinePath:
    r = _cutout_radius(rect, radius)
    if r <= 0.0:
        return rect_path(rect)
    left, top, right, bottom = rect.left, rect.top, rect.right, rect.bottom
    elements: List[PathElement] = [
        MoveTo(Point(left + r, top)),
        LineTo(Point(right - r, top)),
        ArcTo(Point(right - r, top + r), r, 90.0, -90.0),
        LineTo(Point(right, bottom - r)),
        ArcTo(Point(right - r, bottom - r), r, 0.0, -90.0),
        LineTo(Point(left + r, bottom)),
        ArcTo(Point(left + r, bottom - r), r, 270.0, -90.0),
        LineTo(Point(left, top + r)),
        ArcTo(Point(left + r, top + r), r, 180.0, -90.0),
        ClosePath(),
    ]
    return OutlinePath(tuple(elements))


def cutout_path(cutout: CutoutSpec) -> Optional[OutlinePath]:
    if cutout.rect is None:
        return None
    if cutout.shape is CutoutShape.OVAL:
        return OutlinePath((Ellipse(cutout.rect),))
    return rounded_rect_path(cutout.rect, cutout.corner_radius)


def _oval_contains(rect: Rect, point: Point) -> bool:
    rx = rect.width / 2.0
    ry = rect.height / 2.0
    if rx <= 0.0 or ry <= 0.0:
        return False
    center = rect.center
    dx = (point.x - center.x) / rx
    dy = (point.y - center.y) / ry
    return dx * dx + dy * dy <= 1.0


def _rounded_rect_contains(rect: Rect, radius: float, point: Point) -> bool:
    if not rect.contains(point):
        return False
    r = _cutout_radius(rect, radius)
    if r <= 0.0:
        return True
    # Only the four corner squares need the circular test.
    cx = min(max(point.x, rect.left + r), rect.right - r)
    cy = min(max(point.y, rect.top + r), rect.bottom - r)
    dx = point.x - cx
    dy = point.y - cy
    return dx * dx + dy * dy <= r * r


def cutout_contains(cutout: Optional[CutoutSpec], point: Point) -> bool:
    if cutout is None or cutout.rect is None:
        return False
    if cutout.shape is CutoutShape.OVAL:
        return _oval_contains(cutout.rect, point)
    return _rounded_rect_contains(cutout.rect, cutout.corner_radius, point)


@dataclass(frozen=True)
class BackgroundRegion:
    """Screen rectangle minus the cutout."""

    screen: Rect
    cutout: Optional[CutoutSpec] = None

    @property
    def outline(self) -> OutlinePath:
        return rect_path(self.screen)

    @property
    def exclusion(self) -> Optional[OutlinePath]:
        if self.cutout is None:
            return None
        return cutout_path(self.cutout)

    def cutout_contains(self, point: Point) -> bool:
        return cutout_contains(self.cutout, point)

    def contains(self, point: Point) -> bool:
        return self.screen.contains(point) and not self.cutout_contains(point)

    def paint_ops(self, color: str) -> List[PaintOp]:
        return [FillPath(path=self.outline, color=color, exclusion=self.exclusion)]

    def render(self, adapter: PathPainterAdapter, color: str) -> None:
        render_paint_ops(adapter, self.paint_ops(color))


def build_background_region(screen: Rect, cutout: Optional[CutoutSpec] = None) -> BackgroundRegion:
    if cutout is not None and cutout.rect is None:
        cutout = None
    return BackgroundRegion(screen=screen, cutout=cutout)
