"""Tooltip configuration: validated dataclass plus a JSON loader."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar

from overlay_tooltip.errors import TooltipConfigError
from overlay_tooltip.tooltip_model import (
    ArrowSpec,
    CloseButtonMode,
    CutoutShape,
    CutoutSpec,
    Direction,
    Point,
    Rect,
    ShadowSpec,
    SizeConstraints,
)

_TOOLTIP_LOGGER = logging.getLogger("OverlayTooltip")

DEFAULT_BACKGROUND_FADE_MS = 600
DEFAULT_PANEL_FADE_MS = 300

_EnumT = TypeVar("_EnumT", bound=Enum)


@dataclass(frozen=True)
class TooltipConfig:
    direction: Direction = Direction.DOWN
    constraints: SizeConstraints = field(default_factory=SizeConstraints)
    arrow: ArrowSpec = field(default_factory=ArrowSpec)
    corner_radius: float = 10.0
    border_width: float = 2.0
    border_color: str = "#FF000000"
    background_color: str = "#FFFFFFFF"
    outside_background_color: str = "#32FFFFFF"
    has_shadow: bool = True
    shadow: ShadowSpec = field(default_factory=ShadowSpec)
    cutout: CutoutSpec = field(default_factory=CutoutSpec)
    dismiss_on_tap_outside: bool = True
    block_outside_pointer_events: bool = True
    contains_background_overlay: bool = True
    automatic_vertical_direction: bool = False
    snap_vertically: bool = False
    snap_horizontally: bool = False
    close_button: CloseButtonMode = CloseButtonMode.NONE
    close_button_size: float = 30.0
    close_button_color: str = "#FF000000"
    background_fade_ms: int = DEFAULT_BACKGROUND_FADE_MS
    panel_fade_ms: int = DEFAULT_PANEL_FADE_MS

    def __post_init__(self) -> None:
        if not isinstance(self.direction, Direction):
            raise TooltipConfigError(f"direction must be a Direction, got {self.direction!r}")
        non_negative = {
            "corner_radius": self.corner_radius,
            "border_width": self.border_width,
            "close_button_size": self.close_button_size,
            "outside_padding": self.constraints.outside_padding,
            "arrow.length": self.arrow.length,
            "arrow.base_width": self.arrow.base_width,
            "arrow.tip_distance": self.arrow.tip_distance,
            "arrow.offset_from_corner": self.arrow.offset_from_corner,
            "cutout.corner_radius": self.cutout.corner_radius,
        }
        for name, value in non_negative.items():
            if value is not None and value < 0:
                raise TooltipConfigError(f"{name} must not be negative (got {value})")
        if self.background_fade_ms < 0 or self.panel_fade_ms < 0:
            raise TooltipConfigError("fade durations must not be negative")

    @property
    def effective_shadow(self) -> Optional[ShadowSpec]:
        return self.shadow if self.has_shadow else None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TooltipConfig":
        """Build a config from flat JSON-style keys; unknown keys are ignored."""

        defaults = cls()
        base_constraints = defaults.constraints
        constraints = SizeConstraints(
            min_width=_optional_float(data.get("min_width")),
            max_width=_optional_float(data.get("max_width")),
            min_height=_optional_float(data.get("min_height")),
            max_height=_optional_float(data.get("max_height")),
            top=_optional_float(data.get("top")),
            right=_optional_float(data.get("right")),
            bottom=_optional_float(data.get("bottom")),
            left=_optional_float(data.get("left")),
            outside_padding=_coerce_float(data.get("outside_padding"), base_constraints.outside_padding),
        )
        arrow_from_corner = _optional_float(data.get("arrow_from_corner"))
        centered = _coerce_bool(data.get("center_arrow"), arrow_from_corner is None)
        arrow = ArrowSpec(
            length=_coerce_float(data.get("arrow_length"), defaults.arrow.length),
            base_width=_coerce_float(data.get("arrow_base_width"), defaults.arrow.base_width),
            tip_distance=_coerce_float(data.get("arrow_tip_distance"), defaults.arrow.tip_distance),
            centered=centered,
            offset_from_corner=arrow_from_corner,
        )
        shadow = ShadowSpec(
            color=str(data.get("shadow_color") or defaults.shadow.color),
            offset=_coerce_point(data.get("shadow_offset"), defaults.shadow.offset),
            blur_radius=_coerce_float(data.get("shadow_blur_radius"), defaults.shadow.blur_radius),
            spread_radius=_coerce_float(data.get("shadow_spread_radius"), defaults.shadow.spread_radius),
        )
        cutout = CutoutSpec(
            rect=_coerce_rect(data.get("cutout_rect")),
            shape=_coerce_enum(CutoutShape, data.get("cutout_shape"), defaults.cutout.shape),
            corner_radius=_coerce_float(data.get("cutout_corner_radius"), defaults.cutout.corner_radius),
        )
        return cls(
            direction=_coerce_enum(Direction, data.get("direction"), defaults.direction),
            constraints=constraints,
            arrow=arrow,
            corner_radius=_coerce_float(data.get("corner_radius"), defaults.corner_radius),
            border_width=_coerce_float(data.get("border_width"), defaults.border_width),
            border_color=str(data.get("border_color") or defaults.border_color),
            background_color=str(data.get("background_color") or defaults.background_color),
            outside_background_color=str(data.get("outside_background_color") or defaults.outside_background_color),
            has_shadow=_coerce_bool(data.get("has_shadow"), defaults.has_shadow),
            shadow=shadow,
            cutout=cutout,
            dismiss_on_tap_outside=_coerce_bool(data.get("dismiss_on_tap_outside"), defaults.dismiss_on_tap_outside),
            block_outside_pointer_events=_coerce_bool(
                data.get("block_outside_pointer_events"), defaults.block_outside_pointer_events
            ),
            contains_background_overlay=_coerce_bool(
                data.get("contains_background_overlay"), defaults.contains_background_overlay
            ),
            automatic_vertical_direction=_coerce_bool(
                data.get("automatic_vertical_direction"), defaults.automatic_vertical_direction
            ),
            snap_vertically=_coerce_bool(data.get("snap_vertically"), defaults.snap_vertically),
            snap_horizontally=_coerce_bool(data.get("snap_horizontally"), defaults.snap_horizontally),
            close_button=_coerce_enum(CloseButtonMode, data.get("close_button"), defaults.close_button),
            close_button_size=_coerce_float(data.get("close_button_size"), defaults.close_button_size),
            close_button_color=str(data.get("close_button_color") or defaults.close_button_color),
            background_fade_ms=int(_coerce_float(data.get("background_fade_ms"), defaults.background_fade_ms)),
            panel_fade_ms=int(_coerce_float(data.get("panel_fade_ms"), defaults.panel_fade_ms)),
        )


def _optional_float(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def _coerce_float(raw: Any, fallback: float) -> float:
    value = _optional_float(raw)
    return fallback if value is None else value


def _coerce_bool(raw: Any, fallback: bool) -> bool:
    if raw is None:
        return fallback
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return bool(raw)
    token = str(raw).strip().lower()
    if token in {"1", "true", "yes", "on"}:
        return True
    if token in {"0", "false", "no", "off"}:
        return False
    return fallback


def _coerce_enum(enum_type: Type[_EnumT], raw: Any, fallback: _EnumT) -> _EnumT:
    if raw is None:
        return fallback
    if isinstance(raw, enum_type):
        return raw
    token = str(raw).strip().lower().replace("-", "_")
    for member in enum_type:
        if member.value == token:
            return member
    raise TooltipConfigError(f"Unknown {enum_type.__name__} value: {raw!r}")


def _coerce_point(raw: Any, fallback: Point) -> Point:
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        x = _optional_float(raw[0])
        y = _optional_float(raw[1])
        if x is not None and y is not None:
            return Point(x, y)
    return fallback


def _coerce_rect(raw: Any) -> Optional[Rect]:
    if isinstance(raw, Mapping):
        raw = [raw.get("left"), raw.get("top"), raw.get("width"), raw.get("height")]
    if not isinstance(raw, (list, tuple)) or len(raw) != 4:
        return None
    values = [_optional_float(item) for item in raw]
    if any(value is None for value in values):
        return None
    left, top, width, height = values  # type: ignore[misc]
    return Rect(left, top, width, height)


def load_tooltip_config(path: Path) -> TooltipConfig:
    """Read a tooltip config JSON file; unreadable or malformed files yield defaults.

    Contract violations in a readable file (for example max_width < min_width)
    still raise TooltipConfigError.
    """

    try:
        raw_text = path.read_text(encoding="utf-8")
        data = json.loads(raw_text)
    except FileNotFoundError:
        _TOOLTIP_LOGGER.debug("Tooltip config %s not found; using defaults", path)
        data = {}
    except (OSError, json.JSONDecodeError) as exc:
        _TOOLTIP_LOGGER.warning("Tooltip config %s unreadable (%s); using defaults", path, exc)
        data = {}
    if not isinstance(data, dict):
        _TOOLTIP_LOGGER.warning("Tooltip config %s is not a JSON object; using defaults", path)
        data = {}
    return TooltipConfig.from_mapping(data)
