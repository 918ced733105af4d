import pytest
from PyQt6.QtCore import QPointF, Qt

from ecg_strip.graph_widget import ECGStripChartWidget
from ecg_strip.controller import ZoomState

from conftest import make_waveform


class FakeDragEvent:
    """Stand-in for pyqtgraph's MouseDragEvent, positioned in chart pixels"""

    def __init__(self, view_box, x_down, x_now, start=False, finish=False):
        self._down = view_box.mapViewToScene(QPointF(x_down, 100.0))
        self._now = view_box.mapViewToScene(QPointF(x_now, 100.0))
        self._start = start
        self._finish = finish
        self.accepted = False

    def button(self):
        return Qt.MouseButton.LeftButton

    def accept(self):
        self.accepted = True

    def ignore(self):
        self.accepted = False

    def buttonDownScenePos(self):
        return self._down

    def scenePos(self):
        return self._now

    def isStart(self):
        return self._start

    def isFinish(self):
        return self._finish


@pytest.fixture
def widget(qtbot):
    widget = ECGStripChartWidget()
    qtbot.addWidget(widget)
    return widget


def test_empty_widget_draws_nothing(widget):
    assert widget.item_count('trace') == 0
    assert widget.item_count('grid') == 0


def test_rendering_twice_does_not_duplicate_items(widget, three_leads):
    widget.set_waveform(three_leads)
    counts = {group: widget.item_count(group) for group in widget.GROUPS}
    widget.set_waveform(three_leads)

    assert counts['trace'] == 3
    assert counts['label'] == 3
    assert {group: widget.item_count(group) for group in widget.GROUPS} == counts
    assert widget.plot_widget.width() == 810
    assert widget.plot_widget.height() == 730


def test_brush_signal_zooms_and_double_click_resets(widget, qtbot, three_leads):
    widget.set_waveform(three_leads)
    full = widget.controller.time_domain

    widget.view_box.sigBrushEnd.emit((200.0, 400.0))
    assert widget.controller.state == ZoomState.ZOOMED
    assert widget.controller.time_domain == pytest.approx((1.0, 2.0))
    assert "Zoomed" in widget.info_label.text()

    # Let the transition finish, the trace should sit on its final geometry
    qtbot.waitUntil(lambda: not widget._transitions, timeout=3000)
    x, _ = widget._items['trace']['lead-I'].getData()
    assert x[250] == pytest.approx(0.0)

    widget.view_box.sigDoubleClicked.emit()
    assert widget.controller.time_domain == full
    assert widget.controller.state == ZoomState.OVERVIEW


def test_clearing_data_removes_traces(widget, three_leads):
    widget.set_waveform(three_leads)
    widget.set_waveform(None)
    assert widget.item_count('trace') == 0
    assert widget.info_label.text() == "No leads to display"


def test_zero_width_drag_leaves_no_brush_on_screen(widget, three_leads):
    widget.set_waveform(three_leads)
    full = widget.controller.time_domain
    view_box = widget.view_box

    view_box.mouseDragEvent(FakeDragEvent(view_box, 300.0, 300.0, start=True))
    assert view_box.brush_region.isVisible()
    view_box.mouseDragEvent(FakeDragEvent(view_box, 300.0, 300.0, finish=True))

    assert not view_box.brush_region.isVisible()
    assert widget.controller.state == ZoomState.OVERVIEW
    assert widget.controller.time_domain == full


def test_drag_across_chart_zooms_and_hides_brush(widget, three_leads):
    widget.set_waveform(three_leads)
    view_box = widget.view_box

    view_box.mouseDragEvent(FakeDragEvent(view_box, 200.0, 250.0, start=True))
    view_box.mouseDragEvent(FakeDragEvent(view_box, 200.0, 400.0, finish=True))

    assert widget.controller.time_domain == pytest.approx((1.0, 2.0))
    assert not view_box.brush_region.isVisible()
