"""Graph widget for displaying a stacked 12-lead ECG strip"""
import logging
import math
import time
from typing import Callable, Dict, Optional, Tuple

import numpy as np
import pyqtgraph as pg
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel, QProgressBar, QScrollArea
from PyQt6.QtCore import Qt, QTimer, pyqtSignal

from .constants import (
    MARGIN_LEFT, MARGIN_RIGHT, MARGIN_TOP, MARGIN_BOTTOM,
    CHART_VIEWPORT_HEIGHT, TRANSITION_FRAME_MS, X_BOX
)
from .controller import BrushSelection, ZoomController, ZoomState
from .models import Gridline, Polyline, TextLabel, WaveformBuffer
from .transition import PolylineTransition
from .utils import format_time_auto, format_time_window, boxes_in_window

logger = logging.getLogger(__name__)


class BrushViewBox(pg.ViewBox):
    """ViewBox where a left drag selects a time window and a double click resets"""

    sigBrushEnd = pyqtSignal(object)  # Emits (x0, x1) in chart pixels, or None
    sigDoubleClicked = pyqtSignal()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Panning and wheel zoom would fight the brush; the controller owns the range
        self.setMouseEnabled(x=False, y=False)
        self.setMenuEnabled(False)
        self.invertY(True)  # Pixel coordinates grow downwards like the chart geometry
        self.brush_extent = (0.0, 0.0)

        self.brush_region = pg.LinearRegionItem(
            movable=False,
            brush=pg.mkBrush(90, 120, 200, 60),
            pen=pg.mkPen(color=(90, 120, 200), width=1)
        )
        self.brush_region.setZValue(100)
        self.brush_region.hide()
        self.addItem(self.brush_region, ignoreBounds=True)

    def set_brush_extent(self, width: float):
        self.brush_extent = (0.0, width)

    def _clamp(self, x: float) -> float:
        return min(max(x, self.brush_extent[0]), self.brush_extent[1])

    def mouseDragEvent(self, ev, axis=None):
        """Draw the brush while dragging and report its extent on release"""
        if ev.button() != Qt.MouseButton.LeftButton:
            ev.ignore()
            return
        ev.accept()

        x_start = self._clamp(self.mapSceneToView(ev.buttonDownScenePos()).x())
        x_now = self._clamp(self.mapSceneToView(ev.scenePos()).x())
        x0, x1 = min(x_start, x_now), max(x_start, x_now)

        if ev.isStart():
            self.brush_region.show()
        self.brush_region.setRegion((x0, x1))

        if ev.isFinish():
            if x1 > x0:
                self.sigBrushEnd.emit((x0, x1))
            else:
                self.clear_brush()
                self.sigBrushEnd.emit(None)

    def mouseClickEvent(self, ev):
        if ev.double():
            ev.accept()
            self.sigDoubleClicked.emit()
            return
        ev.ignore()

    def clear_brush(self):
        self.brush_region.hide()
        self.brush_region.setRegion((0, 0))


class ECGStripChartWidget(QWidget):
    """Widget for displaying an ECG recording on clinical paper"""

    GROUPS = ('grid', 'trace', 'label')

    def __init__(self):
        super().__init__()
        self._items: Dict[str, Dict[str, object]] = {group: {} for group in self.GROUPS}
        self._trace_data: Dict[str, Tuple[np.ndarray, np.ndarray]] = {}
        self._transitions: Dict[str, Tuple[PolylineTransition, float]] = {}
        self.waveform: Optional[WaveformBuffer] = None

        self._init_ui()

        self._animation_timer = QTimer(self)
        self._animation_timer.setInterval(TRANSITION_FRAME_MS)
        self._animation_timer.timeout.connect(self._advance_transitions)

        self.controller = ZoomController(self, on_domain_changed=self._on_domain_changed)
        self.controller.render(None)

    def _init_ui(self):
        """Initialize the user interface"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        pg.setConfigOptions(antialias=True)

        self.view_box = BrushViewBox()
        self.plot_widget = pg.PlotWidget(viewBox=self.view_box)
        self.plot_widget.setBackground('w')
        self.plot_widget.hideAxis('left')
        self.plot_widget.hideAxis('bottom')
        self.plot_widget.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.plot_widget.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        plot_item = self.plot_widget.getPlotItem()
        plot_item.setContentsMargins(MARGIN_LEFT, MARGIN_TOP, MARGIN_RIGHT, MARGIN_BOTTOM)
        plot_item.layout.setSpacing(0)
        self.plot_widget.disableAutoRange()

        # The chart has a fixed pixel size, so the scroll area provides overflow
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidget(self.plot_widget)
        self.scroll_area.setWidgetResizable(False)
        self.scroll_area.setMinimumHeight(CHART_VIEWPORT_HEIGHT)
        self.scroll_area.setStyleSheet("""
            QScrollArea {
                border: none;
                background-color: #ffffff;
            }
            QScrollBar:horizontal {
                height: 10px;
                border: 1px solid #d5d5d5;
                background: gray;
            }
        """)
        layout.addWidget(self.scroll_area)

        # Progress bar for loading (hidden by default)
        self.progress_bar = QProgressBar()
        self.progress_bar.setTextVisible(True)
        self.progress_bar.setMaximumHeight(25)
        self.progress_bar.hide()
        layout.addWidget(self.progress_bar)

        self.info_label = QLabel("No data loaded")
        self.info_label.setStyleSheet(
            "padding: 6px; "
            "background-color: #f4f4f4; "
            "color: #333333; "
            "border-top: 1px solid #d5d5d5;"
        )
        layout.addWidget(self.info_label)

    # Public API

    def set_waveform(self, waveform: Optional[WaveformBuffer]):
        """Draw a new recording, or an empty chart for None"""
        self.controller.render(waveform)
        self.waveform = waveform

    def zoom_in(self, zoom_factor: str):
        self.controller.zoom_in(zoom_factor)

    def zoom_out(self, zoom_factor: str):
        self.controller.zoom_out(zoom_factor)

    def reset_zoom(self):
        self.controller.on_double_click()

    def set_loading_progress(self, value: int, message: str):
        """Update loading progress bar"""
        self.progress_bar.setValue(value)
        self.progress_bar.setFormat(f"{message} {value}%")
        if not self.progress_bar.isVisible():
            self.progress_bar.show()

    def hide_progress(self):
        """Hide the progress bar"""
        self.progress_bar.hide()

    def item_count(self, group: Optional[str] = None) -> int:
        """Number of drawn items, optionally for a single group"""
        groups = [group] if group else self.GROUPS
        return sum(len(self._items[g]) for g in groups)

    # Rendering surface

    def clear(self, group: Optional[str] = None):
        groups = [group] if group else self.GROUPS
        for g in groups:
            for item in self._items[g].values():
                self.plot_widget.removeItem(item)
            self._items[g].clear()
        if group in (None, 'trace'):
            self._trace_data.clear()
            self._transitions.clear()
            self._animation_timer.stop()

    def set_size(self, width: float, height: float):
        self.plot_widget.setFixedSize(int(math.ceil(width)), int(math.ceil(height)))
        chart_width = width - MARGIN_LEFT - MARGIN_RIGHT
        chart_height = height - MARGIN_TOP - MARGIN_BOTTOM
        self.view_box.set_brush_extent(chart_width)
        if chart_width > 0 and chart_height > 0:
            self.view_box.setRange(xRange=(0, chart_width), yRange=(0, chart_height), padding=0)

    def draw_gridline(self, gridline: Gridline):
        if gridline.orientation == 'vertical':
            x = [gridline.position, gridline.position]
            y = [0, gridline.length]
        else:
            x = [0, gridline.length]
            y = [gridline.position, gridline.position]
        item = pg.PlotCurveItem(x=x, y=y, pen=pg.mkPen(color=gridline.color, width=gridline.stroke_width))
        item.setZValue(-10)
        self._replace_item('grid', gridline.key, item)

    def draw_polyline(self, polyline: Polyline, duration_ms: int = 0):
        existing = self._items['trace'].get(polyline.key)
        if existing is None:
            item = pg.PlotDataItem(polyline.x, polyline.y, pen=pg.mkPen(color=polyline.color, width=polyline.width))
            self._replace_item('trace', polyline.key, item)
            self._trace_data[polyline.key] = (polyline.x, polyline.y)
            return

        # Start from whatever is on screen, which may be mid-way through another transition
        transition = PolylineTransition(self._trace_data.get(polyline.key), (polyline.x, polyline.y), duration_ms)
        if transition.is_instant:
            self._transitions.pop(polyline.key, None)
            self._set_trace(polyline.key, polyline.x, polyline.y)
            return
        self._transitions[polyline.key] = (transition, time.monotonic())
        if not self._animation_timer.isActive():
            self._animation_timer.start()

    def draw_text(self, label: TextLabel):
        existing = self._items['label'].get(label.key)
        if existing is not None:
            existing.setText(label.text, color=label.color)
            existing.setPos(label.x, label.y)
            return
        item = pg.TextItem(text=label.text, color=label.color, anchor=(0, 0.5))
        item.setPos(label.x, label.y)
        self._replace_item('label', label.key, item)

    def clear_brush(self):
        self.view_box.clear_brush()

    def listen_for_drag(self, callback: Callable[[BrushSelection], None]):
        self.view_box.sigBrushEnd.connect(callback)

    def listen_for_double_click(self, callback: Callable[[], None]):
        self.view_box.sigDoubleClicked.connect(callback)

    # Internals

    def _replace_item(self, group: str, key: str, item):
        old = self._items[group].pop(key, None)
        if old is not None:
            self.plot_widget.removeItem(old)
        self.plot_widget.addItem(item, ignoreBounds=True)
        self._items[group][key] = item

    def _set_trace(self, key: str, x: np.ndarray, y: np.ndarray):
        self._items['trace'][key].setData(x, y)
        self._trace_data[key] = (x, y)

    def _advance_transitions(self):
        """Move every running transition one frame forward"""
        now = time.monotonic()
        for key, (transition, started) in list(self._transitions.items()):
            elapsed_ms = (now - started) * 1000
            x, y = transition.frame(elapsed_ms)
            self._set_trace(key, x, y)
            if transition.finished(elapsed_ms):
                del self._transitions[key]
        if not self._transitions:
            self._animation_timer.stop()

    def _on_domain_changed(self, domain: Tuple[float, float], state: ZoomState):
        """Refresh the status line after a render or zoom"""
        leads = self.controller.leads
        if leads.is_empty:
            self.info_label.setText("No leads to display")
            return

        full = self.controller.full_time_domain
        boxes = boxes_in_window(domain, X_BOX)
        state_text = "Zoomed" if state == ZoomState.ZOOMED else "Full recording"
        self.info_label.setText(
            f"{len(leads)} lead(s): {', '.join(leads.names)} | "
            f"Duration: {format_time_auto(full[1] - full[0])} | "
            f"View: {format_time_window(domain)}, {boxes:.1f} small boxes | {state_text} | "
            f"Drag: zoom to selection | Double-click: reset"
        )
