"""Lead traces and labels for the stacked ECG chart"""
from typing import List

from .constants import (
    LEAD_SPAN_MV, BOX_PX, MARGIN_LEFT, LABEL_OFFSET_BOXES,
    TRACE_COLOR, TRACE_WIDTH, LABEL_COLOR
)
from .models import Polyline, RearrangedLeadSet, TextLabel
from .scales import Scales, vertical_offset


def plot_lead(scales: Scales, samples, lead_index: int, name: str) -> Polyline:
    """
    Map one lead onto pixel coordinates using the current time scale.

    The path is recomputed from scratch rather than transformed, so zooming
    always reflects the samples actually inside the visible window.
    """
    offset = vertical_offset(scales.num_leads, lead_index)
    return Polyline(
        key=f"lead-{name}",
        x=scales.time_scale(scales.lead_times[lead_index]),
        y=scales.voltage_scale(samples + offset),
        color=TRACE_COLOR,
        width=TRACE_WIDTH,
    )


def plot_leads(scales: Scales, leads: RearrangedLeadSet) -> List[Polyline]:
    return [
        plot_lead(scales, samples, lead_index, name)
        for lead_index, (name, samples) in enumerate(zip(leads.names, leads.samples))
    ]


def lead_labels(scales: Scales, leads: RearrangedLeadSet) -> List[TextLabel]:
    """One "Lead <name>" label per lead, near the left edge of its band"""
    labels = []
    for lead_index, name in enumerate(leads.names):
        band_top = (scales.num_leads + 1 - lead_index) * LEAD_SPAN_MV
        labels.append(TextLabel(
            key=f"label-{name}",
            text=f"Lead {name}",
            x=MARGIN_LEFT * 2,
            y=scales.voltage_scale(band_top) + BOX_PX * LABEL_OFFSET_BOXES,
            color=LABEL_COLOR,
        ))
    return labels
