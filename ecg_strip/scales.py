"""Time and voltage scales for the stacked ECG chart

The chart uses a single shared voltage axis. Each lead gets its own band of
LEAD_SPAN_MV millivolts and is shifted into that band when plotted, so the
whole recording maps onto one time scale and one voltage scale.
"""
from dataclasses import dataclass, field
from typing import List, Tuple
import math

import numpy as np

from .constants import X_BOX, Y_BOX, MINMV, MAXMV, LEAD_SPAN_MV, BOX_PX
from .models import ChartGeometry, RearrangedLeadSet


class LinearScale:
    """Linear mapping from a value domain onto a pixel range"""

    def __init__(self, domain: Tuple[float, float], range_: Tuple[float, float]):
        self._domain = (float(domain[0]), float(domain[1]))
        self._range = (float(range_[0]), float(range_[1]))

    @property
    def domain(self) -> Tuple[float, float]:
        return self._domain

    @domain.setter
    def domain(self, value: Tuple[float, float]):
        self._domain = (float(value[0]), float(value[1]))

    @property
    def range(self) -> Tuple[float, float]:
        return self._range

    def __call__(self, value):
        """Map a value (or numpy array of values) from domain to range"""
        d0, d1 = self._domain
        r0, r1 = self._range
        values = np.asarray(value, dtype=float)
        if d1 == d0:
            # Collapsed domain: everything lands in the middle of the range
            mapped = np.full_like(values, (r0 + r1) / 2)
        else:
            mapped = r0 + (values - d0) * (r1 - r0) / (d1 - d0)
        return mapped if mapped.ndim else float(mapped)

    def invert(self, pixel: float) -> float:
        """Map a pixel position back into the domain"""
        d0, d1 = self._domain
        r0, r1 = self._range
        if r1 == r0:
            return d0
        return d0 + (float(pixel) - r0) * (d1 - d0) / (r1 - r0)

    def copy(self) -> 'LinearScale':
        return LinearScale(self._domain, self._range)

    def __repr__(self):
        return f"LinearScale(domain={self._domain}, range={self._range})"


def time_domain_for(max_time: float) -> Tuple[float, float]:
    """
    Round the recording length up to a whole small box.

    The quotient is rounded to 9 decimals before taking the ceiling so a
    duration that is a whole number of boxes is not pushed one box further
    by floating point error.
    """
    boxes = math.ceil(round(max_time / X_BOX, 9))
    return 0.0, X_BOX * boxes


def voltage_domain_for(num_leads: int) -> Tuple[float, float]:
    """Voltage window covering every lead band stacked on one axis"""
    return MINMV, MAXMV + LEAD_SPAN_MV * num_leads


def vertical_offset(num_leads: int, lead_index: int) -> float:
    """Voltage shift that moves a lead into its own band"""
    return (num_leads - lead_index) * LEAD_SPAN_MV


@dataclass
class Scales:
    """Scales and geometry computed for one full render"""
    time_scale: LinearScale
    voltage_scale: LinearScale
    full_time_domain: Tuple[float, float]
    geometry: ChartGeometry
    num_leads: int
    num_x_grids: int
    num_y_grids: int
    lead_times: List[np.ndarray] = field(default_factory=list)


def lead_times(leads: RearrangedLeadSet) -> List[np.ndarray]:
    """Sample times in seconds for each lead, i / sample_rate"""
    return [
        np.arange(len(samples), dtype=float) / rate
        for samples, rate in zip(leads.samples, leads.sample_rates)
    ]


def build_scales(leads: RearrangedLeadSet) -> Scales:
    """
    Build the time and voltage scales for a set of leads.

    Args:
        leads: Leads in clinical order

    Returns:
        Scales with the time domain rounded up to a whole small box and the
        chart sized at BOX_PX pixels per small box
    """
    times = lead_times(leads)
    num_leads = len(leads)

    max_time = max((float(t[-1]) for t in times if len(t) > 0), default=0.0)
    x_domain = time_domain_for(max_time)
    y_domain = voltage_domain_for(num_leads)

    num_x_grids = int(round((x_domain[1] - x_domain[0]) / X_BOX))
    num_y_grids = int(round(num_leads * (LEAD_SPAN_MV / Y_BOX)))
    geometry = ChartGeometry(
        chart_width=num_x_grids * BOX_PX,
        chart_height=num_y_grids * BOX_PX,
    )

    time_scale = LinearScale(x_domain, (0, geometry.chart_width))
    # Inverted so that higher voltages render higher on screen
    voltage_scale = LinearScale(y_domain, (geometry.chart_height, 0))

    return Scales(
        time_scale=time_scale,
        voltage_scale=voltage_scale,
        full_time_domain=x_domain,
        geometry=geometry,
        num_leads=num_leads,
        num_x_grids=num_x_grids,
        num_y_grids=num_y_grids,
        lead_times=times,
    )
