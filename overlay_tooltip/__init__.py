"""Anchored tooltip geometry, outline construction and overlay orchestration."""
from __future__ import annotations

from overlay_tooltip.errors import (
    TooltipConfigError,
    TooltipError,
    TooltipStateError,
    UnsupportedDirectionError,
)
from overlay_tooltip.logging_utils import configure_tooltip_logger
from overlay_tooltip.tooltip_config import TooltipConfig, load_tooltip_config
from overlay_tooltip.tooltip_controller import TooltipController
from overlay_tooltip.tooltip_model import (
    ArrowSpec,
    CloseButtonMode,
    CutoutShape,
    CutoutSpec,
    Direction,
    PanelGeometry,
    Point,
    Rect,
    ScreenMetrics,
    SizeConstraints,
)

__all__ = [
    "ArrowSpec",
    "CloseButtonMode",
    "CutoutShape",
    "CutoutSpec",
    "Direction",
    "PanelGeometry",
    "Point",
    "Rect",
    "ScreenMetrics",
    "SizeConstraints",
    "TooltipConfig",
    "TooltipConfigError",
    "TooltipController",
    "TooltipError",
    "TooltipStateError",
    "UnsupportedDirectionError",
    "configure_tooltip_logger",
    "load_tooltip_config",
]
