"""Clinical ECG paper grid"""
from typing import List
import math

from .constants import (
    X_BOX, LARGE_BOX_EVERY, GRIDLINE_COLOR,
    GRID_STROKE_MAJOR, GRID_STROKE_MINOR
)
from .models import Gridline
from .scales import LinearScale, Scales


def stroke_pattern(index: int) -> float:
    """Every fifth line marks a large box and is drawn heavier"""
    return GRID_STROKE_MAJOR if index % LARGE_BOX_EVERY == 0 else GRID_STROKE_MINOR


def vertical_gridlines(time_scale: LinearScale, chart_height: float) -> List[Gridline]:
    """
    Gridlines at every multiple of X_BOX inside the current time domain.

    Lines are indexed by their absolute box number (t / X_BOX), so the bold
    large-box lines stay on the same instants however far the view is zoomed.
    """
    d0, d1 = time_scale.domain
    if d1 <= d0:
        return []

    first = math.ceil(round(d0 / X_BOX, 9))
    last = math.floor(round(d1 / X_BOX, 9))
    lines = []
    for box in range(first, last + 1):
        lines.append(Gridline(
            key=f"x-grid-{box}",
            orientation='vertical',
            position=time_scale(box * X_BOX),
            length=chart_height,
            stroke_width=stroke_pattern(box),
            color=GRIDLINE_COLOR,
        ))
    return lines


def horizontal_gridlines(voltage_scale: LinearScale, num_grids: int, chart_width: float) -> List[Gridline]:
    """Gridlines splitting the voltage domain into num_grids equal divisions"""
    if num_grids <= 0:
        return []

    d0, d1 = voltage_scale.domain
    step = (d1 - d0) / num_grids
    lines = []
    for i in range(num_grids + 1):
        lines.append(Gridline(
            key=f"y-grid-{i}",
            orientation='horizontal',
            position=voltage_scale(d0 + i * step),
            length=chart_width,
            stroke_width=stroke_pattern(i),
            color=GRIDLINE_COLOR,
        ))
    return lines


def generate_grid(scales: Scales) -> List[Gridline]:
    """Regenerate the whole grid for the current time domain"""
    geometry = scales.geometry
    return (
        vertical_gridlines(scales.time_scale, geometry.chart_height)
        + horizontal_gridlines(scales.voltage_scale, scales.num_y_grids, geometry.chart_width)
    )
