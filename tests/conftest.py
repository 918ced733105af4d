import os

import numpy as np
import pytest

# Widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from ecg_strip.models import Channel, WaveformBuffer


class RecordingSurface:
    """Rendering surface that records what the controller draws"""

    GROUPS = ('grid', 'trace', 'label')

    def __init__(self):
        self.items = {group: {} for group in self.GROUPS}
        self.durations = {}
        self.size = None
        self.clear_calls = []
        self.brush_clears = 0
        self.drag_callbacks = []
        self.double_click_callbacks = []

    def clear(self, group=None):
        self.clear_calls.append(group)
        for g in ([group] if group else self.GROUPS):
            self.items[g].clear()

    def set_size(self, width, height):
        self.size = (width, height)

    def draw_gridline(self, gridline):
        self.items['grid'][gridline.key] = gridline

    def draw_polyline(self, polyline, duration_ms=0):
        self.items['trace'][polyline.key] = polyline
        self.durations[polyline.key] = duration_ms

    def draw_text(self, label):
        self.items['label'][label.key] = label

    def clear_brush(self):
        self.brush_clears += 1

    def listen_for_drag(self, callback):
        self.drag_callbacks.append(callback)

    def listen_for_double_click(self, callback):
        self.double_click_callbacks.append(callback)

    # Simulated user gestures

    def drag(self, selection):
        for callback in self.drag_callbacks:
            callback(selection)

    def double_click(self):
        for callback in self.double_click_callbacks:
            callback()


def make_waveform(labels, n_samples=1000, sample_rate=250.0):
    """A recording with one sine wave per label, each at a different frequency"""
    t = np.arange(n_samples) / sample_rate
    buffer = [np.sin(2 * np.pi * (i + 1) * t) for i in range(len(labels))]
    channels = [Channel(label=label, sample_rate=sample_rate) for label in labels]
    return WaveformBuffer(channels=channels, buffer=buffer)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def three_leads():
    return make_waveform(["II", "I", "V1"])
