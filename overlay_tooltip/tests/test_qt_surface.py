from __future__ import annotations

import pytest
from PyQt6.QtCore import QPointF

from overlay_tooltip.background_cutout import build_background_region
from overlay_tooltip.bubble_outline import build_bubble_outline
from overlay_tooltip.path_commands import build_host_path
from overlay_tooltip.qt_surface import QtPathPainterAdapter, to_qpainter_path
from overlay_tooltip.tooltip_model import ArrowSpec, CornerRadii, CutoutSpec, Direction, Point, Rect

BODY = Rect(100.0, 200.0, 200.0, 100.0)


def test_outline_converts_to_filled_bubble_with_notch():
    outline = build_bubble_outline(BODY, Direction.DOWN, Point(200.0, 178.0), CornerRadii(10, 10, 10, 10), ArrowSpec())

    path = to_qpainter_path(outline)

    assert path.contains(QPointF(200.0, 250.0))
    assert path.contains(QPointF(200.0, 190.0))
    assert not path.contains(QPointF(150.0, 190.0))
    assert not path.contains(QPointF(101.0, 201.0))
    bounds = path.boundingRect()
    assert bounds.top() == pytest.approx(180.0)
    assert bounds.bottom() == pytest.approx(300.0)


def test_background_subtraction_leaves_cutout_open():
    region = build_background_region(Rect(0.0, 0.0, 400.0, 800.0), CutoutSpec(rect=Rect(100.0, 100.0, 200.0, 100.0)))
    adapter = QtPathPainterAdapter()

    path = adapter.subtract(build_host_path(adapter, region.outline), build_host_path(adapter, region.exclusion))

    assert not path.contains(QPointF(200.0, 150.0))
    assert path.contains(QPointF(105.0, 105.0))
    assert path.contains(QPointF(350.0, 600.0))


def test_painting_without_painter_raises():
    adapter = QtPathPainterAdapter()

    with pytest.raises(RuntimeError):
        adapter.fill(adapter.new_path(), "white")


@pytest.fixture
def qt_app():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def _host_window(qt_app):
    """400x800 window with a button under a full-size overlay."""
    from PyQt6.QtWidgets import QPushButton, QWidget

    from overlay_tooltip.qt_surface import QtTooltipOverlay

    window = QWidget()
    window.resize(400, 800)
    button = QPushButton("below", window)
    button.setGeometry(10, 700, 100, 40)
    clicks: list[int] = []
    button.clicked.connect(lambda: clicks.append(1))
    overlay = QtTooltipOverlay(window)
    overlay.setGeometry(0, 0, 400, 800)
    overlay.raise_()
    window.show()
    qt_app.processEvents()
    return window, overlay, clicks


def _click(window, x: int, y: int) -> None:
    from PyQt6.QtCore import QPoint, Qt
    from PyQt6.QtTest import QTest

    QTest.mouseClick(window.windowHandle(), Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(x, y))


def _small_panel_config(**kwargs):
    from overlay_tooltip.tooltip_config import TooltipConfig
    from overlay_tooltip.tooltip_model import SizeConstraints

    return TooltipConfig(constraints=SizeConstraints(max_width=100.0, max_height=100.0), **kwargs)


@pytest.mark.pyqt_required
def test_overlay_hosts_controller_layers(qt_app):
    from PyQt6.QtCore import Qt

    from overlay_tooltip.tooltip_config import TooltipConfig
    from overlay_tooltip.tooltip_controller import TooltipController
    from overlay_tooltip.qt_surface import QtTooltipOverlay

    overlay = QtTooltipOverlay()
    overlay.resize(400, 800)
    assert overlay.testAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
    assert overlay.routes_input is False

    controller = TooltipController(TooltipConfig(), overlay)
    session = controller.show(Point(200.0, 100.0))

    assert overlay.layers == session.layers
    assert overlay.routes_input is True
    assert overlay.screen_size().width == 400.0

    controller.close()

    assert overlay.layers == []
    assert overlay.routes_input is False


@pytest.mark.pyqt_required
@pytest.mark.parametrize(
    "dismiss, block, expected_clicks, still_open",
    [
        (False, False, [1], True),
        (True, False, [1], False),
        (False, True, [], True),
        (True, True, [], False),
    ],
)
def test_clicks_outside_panel_reach_widgets_below_unless_blocked(qt_app, dismiss, block, expected_clicks, still_open):
    from overlay_tooltip.tooltip_controller import TooltipController

    window, overlay, clicks = _host_window(qt_app)
    controller = TooltipController(
        _small_panel_config(dismiss_on_tap_outside=dismiss, block_outside_pointer_events=block), overlay
    )
    controller.show(Point(200.0, 100.0))

    _click(window, 60, 720)
    qt_app.processEvents()

    assert clicks == expected_clicks
    assert controller.is_open is still_open
    if controller.is_open:
        controller.close()
    window.close()


@pytest.mark.pyqt_required
def test_panel_swallows_clicks_in_non_blocking_mode(qt_app):
    from overlay_tooltip.tooltip_controller import TooltipController

    window, overlay, clicks = _host_window(qt_app)
    controller = TooltipController(
        _small_panel_config(dismiss_on_tap_outside=False, block_outside_pointer_events=False), overlay
    )
    session = controller.show(Point(60.0, 680.0))
    assert session.body.contains(Point(60.0, 720.0))
    center = session.body.center

    _click(window, int(center.x), int(center.y))

    assert controller.is_open
    assert clicks == []
    controller.close()
    window.close()


@pytest.mark.pyqt_required
def test_fade_animations_are_released_after_close(qt_app):
    from PyQt6.QtCore import QCoreApplication, QEvent, QVariantAnimation

    from overlay_tooltip.tooltip_config import TooltipConfig
    from overlay_tooltip.tooltip_controller import TooltipController
    from overlay_tooltip.qt_surface import QtTooltipOverlay

    overlay = QtTooltipOverlay()
    overlay.resize(400, 800)
    controller = TooltipController(TooltipConfig(), overlay)

    for _ in range(20):
        session = controller.show(Point(200.0, 100.0))
        controller._start_fade(session)
        controller.close()
        qt_app.processEvents()
        QCoreApplication.sendPostedEvents(None, QEvent.Type.DeferredDelete.value)

    assert overlay.findChildren(QVariantAnimation) == []
