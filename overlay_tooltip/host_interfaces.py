"""Narrow host capabilities the tooltip controller depends on, plus the layers it hands over.

The host (overlay/compositor, gesture router and frame scheduler) is injected;
nothing in this module touches a GUI toolkit.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from overlay_tooltip.path_commands import PaintOp, PathPainterAdapter, render_paint_ops
from overlay_tooltip.tooltip_model import HitTestMode, Point, Size

_TOOLTIP_LOGGER = logging.getLogger("OverlayTooltip")

PointerHandler = Callable[[Point], None]
HitRegion = Callable[[Point], bool]


class PointerKind(Enum):
    TAP = "tap"
    POINTER_DOWN = "pointer_down"


class TooltipLayer:
    """One overlay entry: paint ops, a hit region and pointer handlers."""

    def __init__(
        self,
        name: str,
        *,
        hit_test_mode: HitTestMode,
        paint_ops: Sequence[PaintOp],
        hit_region: HitRegion,
        on_tap: Optional[PointerHandler] = None,
        on_pointer_down: Optional[PointerHandler] = None,
    ) -> None:
        self.name = name
        self.hit_test_mode = hit_test_mode
        self.paint_ops: List[PaintOp] = list(paint_ops)
        self._hit_region = hit_region
        self._on_tap = on_tap
        self._on_pointer_down = on_pointer_down
        self.opacity = 0.0

    def __repr__(self) -> str:
        return f"TooltipLayer({self.name!r}, mode={self.hit_test_mode.value}, opacity={self.opacity:.2f})"

    def hit_test(self, point: Point) -> bool:
        if self.hit_test_mode is HitTestMode.IGNORE:
            return False
        return self._hit_region(point)

    def dispatch(self, kind: PointerKind, point: Point) -> bool:
        """Deliver an event; returns True when the layer consumed it."""

        if not self.hit_test(point):
            return False
        handler = self._on_tap if kind is PointerKind.TAP else self._on_pointer_down
        if handler is not None:
            handler(point)
        return self.hit_test_mode is HitTestMode.OPAQUE

    def render(self, adapter: PathPainterAdapter) -> None:
        render_paint_ops(adapter, self.paint_ops)


def dispatch_pointer_event(layers_bottom_to_top: Sequence[TooltipLayer], kind: PointerKind, point: Point) -> bool:
    """Route an event top-down until an opaque layer consumes it."""

    for layer in reversed(list(layers_bottom_to_top)):
        if layer.dispatch(kind, point):
            _TOOLTIP_LOGGER.debug("Pointer %s at (%.1f,%.1f) consumed by %s", kind.value, point.x, point.y, layer.name)
            return True
    return False


class TooltipHost:
    """Overlay, scheduler and surface-metrics capabilities supplied by the embedding app."""

    def screen_size(self) -> Size: ...
    def insert_layers(self, layers: Sequence[TooltipLayer]) -> None: ...
    def remove_layer(self, layer: TooltipLayer) -> None: ...
    def after_first_frame(self, callback: Callable[[], None]) -> None: ...
    def animate_opacity(self, layer: TooltipLayer, target: float, duration_ms: int) -> None: ...
