"""Immutable geometry and configuration value types for the tooltip core (pure, no Qt)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from overlay_tooltip.errors import TooltipConfigError


class Direction(Enum):
    """Side of the anchor the panel occupies."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


class CutoutShape(Enum):
    OVAL = "oval"
    ROUNDED_RECT = "rounded_rect"


class CloseButtonMode(Enum):
    INSIDE = "inside"
    OUTSIDE = "outside"
    NONE = "none"


class HitTestMode(Enum):
    """How a layer takes part in pointer dispatch."""

    OPAQUE = "opaque"
    TRANSLUCENT = "translucent"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        return cls(left, top, right - left, bottom - top)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return Point(self.left + self.width / 2.0, self.top + self.height / 2.0)

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def inset(self, *, left: float = 0.0, top: float = 0.0, right: float = 0.0, bottom: float = 0.0) -> "Rect":
        width = max(0.0, self.width - left - right)
        height = max(0.0, self.height - top - bottom)
        return Rect(self.left + left, self.top + top, width, height)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.width, self.height)


AnchorPoint = Point


@dataclass(frozen=True)
class ScreenMetrics:
    width: float
    height: float

    @property
    def rect(self) -> Rect:
        return Rect(0.0, 0.0, self.width, self.height)

    @property
    def center(self) -> Point:
        return Point(self.width / 2.0, self.height / 2.0)


def _check_range(label: str, minimum: Optional[float], maximum: Optional[float]) -> None:
    low = 0.0 if minimum is None else float(minimum)
    high = math.inf if maximum is None else float(maximum)
    if high < low:
        raise TooltipConfigError(f"max {label} ({maximum}) must not be smaller than min {label} ({minimum})")


@dataclass(frozen=True)
class SizeConstraints:
    """Size bounds, optional fixed screen offsets and the screen-edge padding."""

    min_width: Optional[float] = None
    max_width: Optional[float] = None
    min_height: Optional[float] = None
    max_height: Optional[float] = None
    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    left: Optional[float] = None
    outside_padding: float = 20.0

    def __post_init__(self) -> None:
        _check_range("width", self.min_width, self.max_width)
        _check_range("height", self.min_height, self.max_height)


@dataclass(frozen=True)
class ArrowSpec:
    length: float = 20.0
    base_width: float = 20.0
    tip_distance: float = 2.0
    centered: bool = True
    offset_from_corner: Optional[float] = None

    def __post_init__(self) -> None:
        if self.centered and self.offset_from_corner is not None:
            raise TooltipConfigError("A centered arrow cannot also define offset_from_corner")
        if not self.centered and self.offset_from_corner is None:
            raise TooltipConfigError("A non-centered arrow requires offset_from_corner")

    @property
    def clearance(self) -> float:
        """Distance between the anchor and the body edge carrying the notch."""
        return self.tip_distance + self.length


@dataclass(frozen=True)
class CornerRadii:
    top_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0
    bottom_left: float = 0.0


@dataclass(frozen=True)
class CutoutSpec:
    rect: Optional[Rect] = None
    shape: CutoutShape = CutoutShape.OVAL
    corner_radius: float = 5.0


@dataclass(frozen=True)
class ShadowSpec:
    color: str = "#8A000000"
    offset: Point = Point(0.0, 0.0)
    blur_radius: float = 10.0
    spread_radius: float = 5.0


@dataclass(frozen=True)
class PanelGeometry:
    """Resolved panel box (arrow margin included) in screen coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def rect(self) -> Rect:
        return Rect(self.left, self.top, self.width, self.height)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height
