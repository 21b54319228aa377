"""Host-independent path/paint descriptions and the painter adapter they replay onto."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Tuple, Union

from overlay_tooltip.tooltip_model import Point, Rect, ShadowSpec


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class ArcTo:
    """Circular arc around ``center``.

    Angles are in degrees, zero at 3 o'clock, positive sweeps run counter-clockwise
    on screen (y grows downwards), matching QPainterPath.arcTo.
    """

    center: Point
    radius: float
    start_angle: float
    sweep_angle: float

    def point_at(self, angle: float) -> Point:
        radians = math.radians(angle)
        return Point(
            self.center.x + self.radius * math.cos(radians),
            self.center.y - self.radius * math.sin(radians),
        )

    @property
    def start(self) -> Point:
        return self.point_at(self.start_angle)

    @property
    def end(self) -> Point:
        return self.point_at(self.start_angle + self.sweep_angle)


@dataclass(frozen=True)
class Ellipse:
    """Closed elliptic subpath inscribed in ``rect``."""

    rect: Rect


@dataclass(frozen=True)
class ClosePath:
    pass


PathElement = Union[MoveTo, LineTo, ArcTo, Ellipse, ClosePath]


def _rounded(point: Point, digits: int = 6) -> Tuple[float, float]:
    return (round(point.x, digits), round(point.y, digits))


@dataclass(frozen=True)
class OutlinePath:
    elements: Tuple[PathElement, ...]

    @property
    def start_point(self) -> Optional[Point]:
        for element in self.elements:
            if isinstance(element, MoveTo):
                return element.point
        return None

    @property
    def end_point(self) -> Optional[Point]:
        """Pen position after the last drawing element (ClosePath is not a move)."""
        for element in reversed(self.elements):
            if isinstance(element, (MoveTo, LineTo)):
                return element.point
            if isinstance(element, ArcTo):
                return element.end
        return None

    @property
    def is_closed(self) -> bool:
        if not self.elements or not isinstance(self.elements[-1], ClosePath):
            return False
        start = self.start_point
        end = self.end_point
        if start is None or end is None:
            return False
        return _rounded(start) == _rounded(end)

    @property
    def contour_count(self) -> int:
        return sum(1 for element in self.elements if isinstance(element, (MoveTo, Ellipse)))

    def vertices(self) -> list[Point]:
        """Pen positions visited by the path, arcs reduced to their end points."""
        points: list[Point] = []
        for element in self.elements:
            if isinstance(element, (MoveTo, LineTo)):
                points.append(element.point)
            elif isinstance(element, ArcTo):
                points.append(element.end)
        return points


class PathPainterAdapter:
    """Drawing surface supplied by the host renderer."""

    def new_path(self) -> Any: ...
    def move_to(self, path: Any, x: float, y: float) -> None: ...
    def line_to(self, path: Any, x: float, y: float) -> None: ...
    def arc_to(self, path: Any, cx: float, cy: float, radius: float, start_angle: float, sweep_angle: float) -> None: ...
    def add_ellipse(self, path: Any, left: float, top: float, width: float, height: float) -> None: ...
    def close_path(self, path: Any) -> None: ...
    def subtract(self, path: Any, other: Any) -> Any: ...
    def stroke(self, path: Any, color: str, width: float) -> None: ...
    def fill(self, path: Any, color: str, *, shadow: Optional[ShadowSpec] = None) -> None: ...


def build_host_path(adapter: PathPainterAdapter, outline: OutlinePath) -> Any:
    path = adapter.new_path()
    for element in outline.elements:
        if isinstance(element, MoveTo):
            adapter.move_to(path, element.point.x, element.point.y)
        elif isinstance(element, LineTo):
            adapter.line_to(path, element.point.x, element.point.y)
        elif isinstance(element, ArcTo):
            adapter.arc_to(
                path,
                element.center.x,
                element.center.y,
                element.radius,
                element.start_angle,
                element.sweep_angle,
            )
        elif isinstance(element, Ellipse):
            rect = element.rect
            adapter.add_ellipse(path, rect.left, rect.top, rect.width, rect.height)
        elif isinstance(element, ClosePath):
            adapter.close_path(path)
        else:
            raise TypeError(f"Unknown path element: {element!r}")
    return path


@dataclass(frozen=True)
class FillPath:
    path: OutlinePath
    color: str
    shadow: Optional[ShadowSpec] = None
    exclusion: Optional[OutlinePath] = None


@dataclass(frozen=True)
class StrokePath:
    path: OutlinePath
    color: str
    width: float


PaintOp = Union[FillPath, StrokePath]


def render_paint_ops(
    adapter: PathPainterAdapter,
    ops: Iterable[PaintOp],
    *,
    trace: Optional[Callable[[str, Mapping[str, Any]], None]] = None,
) -> None:
    for op in ops:
        host_path = build_host_path(adapter, op.path)
        if isinstance(op, FillPath):
            if op.exclusion is not None:
                host_path = adapter.subtract(host_path, build_host_path(adapter, op.exclusion))
            adapter.fill(host_path, op.color, shadow=op.shadow)
            if trace:
                trace("paint:fill", {"color": op.color, "shadow": op.shadow is not None, "cutout": op.exclusion is not None})
        elif isinstance(op, StrokePath):
            adapter.stroke(host_path, op.color, op.width)
            if trace:
                trace("paint:stroke", {"color": op.color, "width": op.width})
        else:
            raise TypeError(f"Unknown paint op: {op!r}")


def polyline(points: Sequence[Point]) -> OutlinePath:
    """Open path through ``points``."""
    if not points:
        return OutlinePath(())
    elements: list[PathElement] = [MoveTo(points[0])]
    elements.extend(LineTo(point) for point in points[1:])
    return OutlinePath(tuple(elements))
