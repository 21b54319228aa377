"""PyQt6 implementations of the tooltip painter adapter and overlay host."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from PyQt6.QtCore import QAbstractAnimation, QEvent, QObject, QPointF, QRectF, Qt, QTimer, QVariantAnimation
from PyQt6.QtGui import QBrush, QColor, QMouseEvent, QPainter, QPainterPath, QPainterPathStroker, QPen, QWindow
from PyQt6.QtWidgets import QApplication, QWidget

from overlay_tooltip.host_interfaces import PointerKind, TooltipHost, TooltipLayer, dispatch_pointer_event
from overlay_tooltip.path_commands import OutlinePath, PathPainterAdapter, build_host_path
from overlay_tooltip.tooltip_model import HitTestMode, Point, ShadowSpec, Size

_TOOLTIP_LOGGER = logging.getLogger("OverlayTooltip")

SHADOW_BLUR_STEPS = 4
TAP_SLOP_PX = 18.0


def _qcolor(value: str, fallback: str = "black") -> QColor:
    color = QColor(value)
    if not color.isValid():
        color = QColor(fallback)
    return color


class QtPathPainterAdapter(PathPainterAdapter):
    def __init__(self, painter: Optional[QPainter] = None) -> None:
        self._painter = painter

    def new_path(self) -> QPainterPath:
        return QPainterPath()

    def move_to(self, path: QPainterPath, x: float, y: float) -> None:
        path.moveTo(QPointF(x, y))

    def line_to(self, path: QPainterPath, x: float, y: float) -> None:
        path.lineTo(QPointF(x, y))

    def arc_to(
        self, path: QPainterPath, cx: float, cy: float, radius: float, start_angle: float, sweep_angle: float
    ) -> None:
        path.arcTo(QRectF(cx - radius, cy - radius, 2 * radius, 2 * radius), start_angle, sweep_angle)

    def add_ellipse(self, path: QPainterPath, left: float, top: float, width: float, height: float) -> None:
        path.addEllipse(QRectF(left, top, width, height))

    def close_path(self, path: QPainterPath) -> None:
        path.closeSubpath()

    def subtract(self, path: QPainterPath, other: QPainterPath) -> QPainterPath:
        return path.subtracted(other)

    def stroke(self, path: QPainterPath, color: str, width: float) -> None:
        painter = self._require_painter()
        pen = QPen(_qcolor(color))
        pen.setWidthF(max(0.0, float(width)))
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)

    def fill(self, path: QPainterPath, color: str, *, shadow: Optional[ShadowSpec] = None) -> None:
        painter = self._require_painter()
        if shadow is not None:
            self._paint_shadow(painter, path, shadow)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(_qcolor(color, "white")))
        painter.drawPath(path)

    def _paint_shadow(self, painter: QPainter, path: QPainterPath, shadow: ShadowSpec) -> None:
        base = path.translated(shadow.offset.x, shadow.offset.y)
        color = _qcolor(shadow.color)
        if shadow.spread_radius > 0:
            stroker = QPainterPathStroker()
            stroker.setWidth(2 * shadow.spread_radius)
            base = base.united(stroker.createStroke(base))
        painter.setPen(Qt.PenStyle.NoPen)
        # Approximate the blur with fading rings around the spread shape.
        steps = SHADOW_BLUR_STEPS if shadow.blur_radius > 0 else 0
        for step in range(steps, 0, -1):
            ring = QPainterPathStroker()
            ring.setWidth(2 * shadow.blur_radius * step / steps)
            ring_color = QColor(color)
            ring_color.setAlphaF(color.alphaF() / (steps + 1))
            painter.setBrush(QBrush(ring_color))
            painter.drawPath(base.united(ring.createStroke(base)))
        painter.setBrush(QBrush(color))
        painter.drawPath(base)

    def _require_painter(self) -> QPainter:
        if self._painter is None:
            raise RuntimeError("QtPathPainterAdapter has no active QPainter")
        return self._painter


def to_qpainter_path(outline: OutlinePath) -> QPainterPath:
    return build_host_path(QtPathPainterAdapter(), outline)


class QtTooltipOverlay(TooltipHost, QWidget):
    """Transparent widget painting tooltip layers above its parent's content.

    The widget itself never takes mouse input. While layers are present an
    application event filter watches the mouse events of the overlay's window:
    events an opaque layer consumes are swallowed there, everything else
    (translucent observers, ignored layers, misses) reaches the widgets below.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._layers: List[TooltipLayer] = []
        self._animations: Dict[int, QVariantAnimation] = {}
        self._pending_frame_callbacks: List[Callable[[], None]] = []
        self._press_point: Optional[Point] = None
        self._filter_installed = False

    @property
    def layers(self) -> List[TooltipLayer]:
        return list(self._layers)

    @property
    def routes_input(self) -> bool:
        return self._filter_installed

    # TooltipHost -------------------------------------------------------------

    def screen_size(self) -> Size:
        return Size(float(self.width()), float(self.height()))

    def insert_layers(self, layers: Sequence[TooltipLayer]) -> None:
        self._layers.extend(layers)
        self._refresh_input_routing()
        self.update()

    def remove_layer(self, layer: TooltipLayer) -> None:
        animation = self._animations.pop(id(layer), None)
        if animation is not None:
            animation.stop()
        if layer in self._layers:
            self._layers.remove(layer)
        self._refresh_input_routing()
        self.update()

    def after_first_frame(self, callback: Callable[[], None]) -> None:
        self._pending_frame_callbacks.append(callback)
        self.update()

    def animate_opacity(self, layer: TooltipLayer, target: float, duration_ms: int) -> None:
        key = id(layer)
        previous = self._animations.pop(key, None)
        if previous is not None:
            previous.stop()
        animation = QVariantAnimation(self)
        animation.setStartValue(float(layer.opacity))
        animation.setEndValue(float(target))
        animation.setDuration(max(0, int(duration_ms)))

        def _apply(value: object) -> None:
            layer.opacity = float(value)  # type: ignore[arg-type]
            self.update()

        def _finished() -> None:
            if self._animations.get(key) is animation:
                del self._animations[key]

        animation.valueChanged.connect(_apply)
        animation.finished.connect(_finished)
        self._animations[key] = animation
        # Stopped or finished animations delete themselves.
        animation.start(QAbstractAnimation.DeletionPolicy.DeleteWhenStopped)

    # Qt events ---------------------------------------------------------------

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            adapter = QtPathPainterAdapter(painter)
            for layer in self._layers:
                painter.setOpacity(max(0.0, min(1.0, layer.opacity)))
                layer.render(adapter)
        finally:
            painter.end()
        if self._pending_frame_callbacks:
            callbacks = self._pending_frame_callbacks
            self._pending_frame_callbacks = []
            for callback in callbacks:
                QTimer.singleShot(0, callback)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if not isinstance(watched, QWindow) or not isinstance(event, QMouseEvent):
            return False
        if not self._layers or not self.isVisible() or watched is not self.window().windowHandle():
            return False
        kind = event.type()
        if kind == QEvent.Type.MouseButtonPress:
            return self._route_press(event)
        if kind == QEvent.Type.MouseButtonRelease:
            return self._route_release(event)
        if kind == QEvent.Type.MouseButtonDblClick:
            return self._press_point is not None or self._opaque_at(self._local_point(event))
        if kind == QEvent.Type.MouseMove:
            return self._press_point is not None
        return False

    def _local_point(self, event: QMouseEvent) -> Point:
        local = self.mapFromGlobal(event.globalPosition())
        return Point(local.x(), local.y())

    def _opaque_at(self, point: Point) -> bool:
        return any(
            layer.hit_test_mode is HitTestMode.OPAQUE and layer.hit_test(point) for layer in self._layers
        )

    def _route_press(self, event: QMouseEvent) -> bool:
        if event.button() != Qt.MouseButton.LeftButton:
            return self._press_point is not None
        point = self._local_point(event)
        if dispatch_pointer_event(self._layers, PointerKind.POINTER_DOWN, point):
            self._press_point = point
            return True
        self._press_point = None
        return False

    def _route_release(self, event: QMouseEvent) -> bool:
        press = self._press_point
        if press is None:
            return False
        if event.button() != Qt.MouseButton.LeftButton:
            return True
        self._press_point = None
        point = self._local_point(event)
        if abs(point.x - press.x) <= TAP_SLOP_PX and abs(point.y - press.y) <= TAP_SLOP_PX:
            dispatch_pointer_event(self._layers, PointerKind.TAP, point)
        # The matching press was consumed, so the release is too.
        return True

    def _refresh_input_routing(self) -> None:
        app = QApplication.instance()
        active = bool(self._layers)
        if active and not self._filter_installed and app is not None:
            app.installEventFilter(self)
            self._filter_installed = True
        elif not active and self._filter_installed:
            if app is not None:
                app.removeEventFilter(self)
            self._filter_installed = False
            self._press_point = None
        else:
            return
        _TOOLTIP_LOGGER.debug("Tooltip overlay input routing %s", "enabled" if active else "disabled")
