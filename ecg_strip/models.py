"""Data models for the ECG strip chart"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import math

import numpy as np

from .exceptions import MalformedWaveformError
from .constants import MARGIN_LEFT, MARGIN_RIGHT, MARGIN_TOP, MARGIN_BOTTOM


@dataclass(frozen=True)
class Channel:
    """Metadata for a single ECG lead"""
    label: str
    sample_rate: float  # Hz


@dataclass
class WaveformBuffer:
    """Channels and their sample sequences, matched by index"""
    channels: List[Channel]
    buffer: List[Sequence[float]]

    def validate(self) -> None:
        """
        Check the buffer lines up with the channel list.

        Raises:
            MalformedWaveformError: if the lengths differ, a lead is not a
                flat sequence of samples, or a sample rate is not a positive
                finite number
        """
        if len(self.buffer) != len(self.channels):
            raise MalformedWaveformError(
                f"Buffer has {len(self.buffer)} lead(s) but {len(self.channels)} channel(s) were supplied"
            )
        for channel, samples in zip(self.channels, self.buffer):
            if np.ndim(samples) != 1:
                raise MalformedWaveformError(
                    f"Lead {channel.label!r} must be a one-dimensional sample list"
                )
        for channel in self.channels:
            rate = channel.sample_rate
            if not isinstance(rate, (int, float)) or not math.isfinite(rate) or rate <= 0:
                raise MalformedWaveformError(
                    f"Channel {channel.label!r} has invalid sample rate {rate!r}"
                )

    @property
    def labels(self) -> List[str]:
        return [channel.label for channel in self.channels]


@dataclass
class RearrangedLeadSet:
    """Leads present in the input, in clinical order"""
    names: List[str] = field(default_factory=list)
    samples: List[np.ndarray] = field(default_factory=list)
    sample_rates: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.names)

    @property
    def is_empty(self) -> bool:
        return len(self.names) == 0


@dataclass(frozen=True)
class ChartGeometry:
    """Pixel dimensions of the chart box and the drawing root around it"""
    chart_width: float
    chart_height: float
    margin_left: int = MARGIN_LEFT
    margin_right: int = MARGIN_RIGHT
    margin_top: int = MARGIN_TOP
    margin_bottom: int = MARGIN_BOTTOM

    @property
    def width(self) -> float:
        return self.chart_width + self.margin_left + self.margin_right

    @property
    def height(self) -> float:
        return self.chart_height + self.margin_top + self.margin_bottom


@dataclass(frozen=True)
class Gridline:
    """A single gridline in chart pixel coordinates"""
    key: str
    orientation: str  # 'vertical' or 'horizontal'
    position: float  # x for vertical lines, y for horizontal lines
    length: float
    stroke_width: float
    color: str


@dataclass
class Polyline:
    """A lead's trace in chart pixel coordinates"""
    key: str
    x: np.ndarray
    y: np.ndarray
    color: str
    width: float


@dataclass(frozen=True)
class TextLabel:
    """A lead label in chart pixel coordinates"""
    key: str
    text: str
    x: float
    y: float
    color: str


@dataclass
class Scene:
    """Every primitive needed to draw the chart once"""
    geometry: ChartGeometry
    gridlines: List[Gridline] = field(default_factory=list)
    polylines: List[Polyline] = field(default_factory=list)
    labels: List[TextLabel] = field(default_factory=list)
    time_domain: Optional[Tuple[float, float]] = None
