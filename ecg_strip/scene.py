"""Assemble every drawable primitive for the current view"""
from .grid import generate_grid
from .models import RearrangedLeadSet, Scene
from .plotter import plot_leads, lead_labels
from .scales import Scales


def build_scene(scales: Scales, leads: RearrangedLeadSet) -> Scene:
    """Grid, traces and labels for the scales' current time domain"""
    return Scene(
        geometry=scales.geometry,
        gridlines=generate_grid(scales),
        polylines=plot_leads(scales, leads),
        labels=lead_labels(scales, leads),
        time_domain=scales.time_scale.domain,
    )
