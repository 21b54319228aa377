"""Tooltip lifecycle controller: policy resolution, geometry, layers and dismissal.

This module stays free of GUI toolkit types; the host supplies layer insertion,
post-frame scheduling and opacity animation through ``TooltipHost``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from overlay_tooltip.background_cutout import BackgroundRegion, build_background_region, cutout_contains
from overlay_tooltip.bubble_outline import (
    build_bubble_outline,
    build_bubble_paint_ops,
    fit_corner_radii,
    leading_corner_radius,
    resolve_corner_radii,
)
from overlay_tooltip.decorations import (
    EdgeInsets,
    body_rect,
    close_button_paint_ops,
    close_button_rect,
    panel_margins,
)
from overlay_tooltip.errors import TooltipStateError
from overlay_tooltip.host_interfaces import PointerHandler, TooltipHost, TooltipLayer
from overlay_tooltip.path_commands import OutlinePath, PaintOp
from overlay_tooltip.placement_policy import ResolvedPlacement, resolve_placement
from overlay_tooltip.position_solver import solve_panel_geometry
from overlay_tooltip.tooltip_config import TooltipConfig
from overlay_tooltip.tooltip_model import (
    AnchorPoint,
    CornerRadii,
    HitTestMode,
    PanelGeometry,
    Point,
    Rect,
    ScreenMetrics,
    Size,
)

_LOGGER_NAME = "OverlayTooltip"
_TOOLTIP_LOGGER = logging.getLogger(_LOGGER_NAME)

BACKGROUND_LAYER_NAME = "tooltip-background"
PANEL_LAYER_NAME = "tooltip-panel"


@dataclass
class TooltipSession:
    """Everything built for one open tooltip; dropped entirely on close()."""

    anchor: AnchorPoint
    screen: ScreenMetrics
    placement: ResolvedPlacement
    geometry: PanelGeometry
    margins: EdgeInsets
    body: Rect
    radii: CornerRadii
    outline: OutlinePath
    close_button: Optional[Rect]
    region: Optional[BackgroundRegion]
    panel_layer: TooltipLayer
    background_layer: Optional[TooltipLayer]

    @property
    def layers(self) -> List[TooltipLayer]:
        if self.background_layer is None:
            return [self.panel_layer]
        return [self.background_layer, self.panel_layer]


class TooltipController:
    """Closed -> show() -> Open -> close() -> Closed."""

    def __init__(
        self,
        config: TooltipConfig,
        host: TooltipHost,
        *,
        on_close: Optional[Callable[[], None]] = None,
        preferred_size: Optional[Size] = None,
    ) -> None:
        self._config = config
        self._host = host
        self._on_close = on_close
        self._preferred_size = preferred_size
        self._session: Optional[TooltipSession] = None

    @property
    def config(self) -> TooltipConfig:
        return self._config

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[TooltipSession]:
        return self._session

    @property
    def geometry(self) -> Optional[PanelGeometry]:
        return None if self._session is None else self._session.geometry

    @property
    def outline(self) -> Optional[OutlinePath]:
        return None if self._session is None else self._session.outline

    def is_inside_cutout(self, point: Point) -> bool:
        """Cutout classification; independent of whether a background layer exists."""
        return cutout_contains(self._config.cutout, point)

    def show(self, anchor: AnchorPoint) -> TooltipSession:
        if self._session is not None:
            raise TooltipStateError("show() called while the tooltip is already open")
        config = self._config
        size = self._host.screen_size()
        screen = ScreenMetrics(float(size.width), float(size.height))

        placement = resolve_placement(
            config.direction,
            anchor,
            screen,
            config.constraints,
            automatic_direction=config.automatic_vertical_direction,
            snap_vertically=config.snap_vertically,
            snap_horizontally=config.snap_horizontally,
        )
        direction = placement.direction
        radii = resolve_corner_radii(config.corner_radius, placement.constraints)
        margins = panel_margins(direction, config.arrow, config.close_button, config.close_button_size)
        geometry, body = self._solve_body(anchor, screen, placement, margins, leading_corner_radius(radii, direction))
        # Only the origin depends on the radius, so one re-solve settles a radius shrunk to fit the body.
        fitted_leading = leading_corner_radius(fit_corner_radii(body, radii), direction)
        if fitted_leading != leading_corner_radius(radii, direction):
            geometry, body = self._solve_body(anchor, screen, placement, margins, fitted_leading)
        outline = build_bubble_outline(body, direction, anchor, radii, config.arrow)
        panel_ops: List[PaintOp] = build_bubble_paint_ops(
            outline,
            body,
            placement.constraints,
            background_color=config.background_color,
            border_color=config.border_color,
            border_width=config.border_width,
            shadow=config.effective_shadow,
        )
        button = close_button_rect(geometry, direction, config.close_button, config.close_button_size, config.arrow)
        if button is not None:
            panel_ops.extend(close_button_paint_ops(button, config.close_button_color))

        region: Optional[BackgroundRegion] = None
        background_layer: Optional[TooltipLayer] = None
        if config.contains_background_overlay:
            region = build_background_region(screen.rect, config.cutout)
            background_layer = self._build_background_layer(region)

        panel_layer = TooltipLayer(
            PANEL_LAYER_NAME,
            hit_test_mode=HitTestMode.OPAQUE,
            paint_ops=panel_ops,
            hit_region=lambda point: body.contains(point) or (button is not None and button.contains(point)),
            on_tap=self._panel_tap_handler(button),
        )
        session = TooltipSession(
            anchor=anchor,
            screen=screen,
            placement=placement,
            geometry=geometry,
            margins=margins,
            body=body,
            radii=radii,
            outline=outline,
            close_button=button,
            region=region,
            panel_layer=panel_layer,
            background_layer=background_layer,
        )
        self._session = session
        for layer in session.layers:
            layer.opacity = 0.0
        self._host.insert_layers(session.layers)
        self._host.after_first_frame(lambda: self._start_fade(session))
        _TOOLTIP_LOGGER.info(
            "Tooltip shown: direction=%s anchor=(%.1f,%.1f) panel=(%.1f,%.1f,%.1f,%.1f) background=%s",
            direction.value,
            anchor.x,
            anchor.y,
            geometry.left,
            geometry.top,
            geometry.width,
            geometry.height,
            background_layer is not None,
        )
        return session

    def close(self) -> None:
        session = self._session
        if session is None:
            raise TooltipStateError("close() called while the tooltip is closed")
        self._session = None
        try:
            if self._on_close is not None:
                self._on_close()
        finally:
            self._host.remove_layer(session.panel_layer)
            if session.background_layer is not None:
                self._host.remove_layer(session.background_layer)
            _TOOLTIP_LOGGER.info("Tooltip closed")

    def _solve_body(
        self,
        anchor: AnchorPoint,
        screen: ScreenMetrics,
        placement: ResolvedPlacement,
        margins: EdgeInsets,
        leading_radius: float,
    ) -> Tuple[PanelGeometry, Rect]:
        geometry = solve_panel_geometry(
            placement.direction,
            anchor,
            screen,
            placement.constraints,
            self._config.arrow,
            corner_radius=leading_radius,
            preferred_size=self._preferred_size,
        )
        return geometry, body_rect(geometry, margins)

    def _start_fade(self, session: TooltipSession) -> None:
        if self._session is not session:
            _TOOLTIP_LOGGER.debug("Skipping fade-in for a tooltip that is no longer open")
            return
        if session.background_layer is not None:
            self._host.animate_opacity(session.background_layer, 1.0, self._config.background_fade_ms)
        self._host.animate_opacity(session.panel_layer, 1.0, self._config.panel_fade_ms)

    def _dismiss(self, reason: str) -> None:
        if self._session is None:
            return
        _TOOLTIP_LOGGER.debug("Dismissing tooltip (reason=%s)", reason)
        self.close()

    def background_policy(
        self, region: BackgroundRegion
    ) -> Tuple[HitTestMode, Optional[PointerHandler], Optional[PointerHandler]]:
        """Hit-test mode plus (tap, pointer-down) handlers for the dismiss/block combination."""

        dismiss = self._config.dismiss_on_tap_outside
        block = self._config.block_outside_pointer_events
        if dismiss and block:
            return HitTestMode.OPAQUE, lambda _point: self._dismiss("background tap"), None

        if dismiss and not block:
            def _on_pointer_down(point: Point) -> None:
                if not region.cutout_contains(point):
                    self._dismiss("pointer down outside cutout")

            return HitTestMode.TRANSLUCENT, None, _on_pointer_down

        if block:
            return HitTestMode.OPAQUE, None, None
        return HitTestMode.IGNORE, None, None

    def _build_background_layer(self, region: BackgroundRegion) -> TooltipLayer:
        mode, on_tap, on_pointer_down = self.background_policy(region)
        return TooltipLayer(
            BACKGROUND_LAYER_NAME,
            hit_test_mode=mode,
            paint_ops=region.paint_ops(self._config.outside_background_color),
            hit_region=region.screen.contains,
            on_tap=on_tap,
            on_pointer_down=on_pointer_down,
        )

    def _panel_tap_handler(self, button: Optional[Rect]) -> Optional[PointerHandler]:
        if button is None:
            return None

        def _on_tap(point: Point) -> None:
            if button.contains(point):
                self._dismiss("close button")

        return _on_tap
