import numpy as np
import pytest

from ecg_strip.plotter import lead_labels, plot_leads
from ecg_strip.reorder import rearrange_buffer
from ecg_strip.scales import build_scales
from ecg_strip.scene import build_scene

from conftest import make_waveform


@pytest.fixture
def leads():
    return rearrange_buffer(make_waveform(["II", "I"]))


def test_each_lead_is_shifted_into_its_own_band(leads):
    scales = build_scales(leads)
    polylines = plot_leads(scales, leads)

    assert [p.key for p in polylines] == ["lead-I", "lead-II"]
    for lead_index, polyline in enumerate(polylines):
        offset = (2 - lead_index) * 3.0
        np.testing.assert_allclose(polyline.x, scales.time_scale(scales.lead_times[lead_index]))
        np.testing.assert_allclose(polyline.y, scales.voltage_scale(leads.samples[lead_index] + offset))


def test_first_lead_is_drawn_above_later_leads(leads):
    scales = build_scales(leads)
    first, second = plot_leads(scales, leads)
    # Screen y grows downwards
    assert first.y.mean() < second.y.mean()


def test_paths_follow_current_time_scale(leads):
    scales = build_scales(leads)
    before = plot_leads(scales, leads)[0]

    scales.time_scale.domain = (1.0, 2.0)
    after = plot_leads(scales, leads)[0]

    # Sample at 1.0 s (index 250) moves to the left edge
    assert after.x[250] == pytest.approx(0.0)
    assert after.x[500] == pytest.approx(scales.geometry.chart_width)
    np.testing.assert_allclose(after.y, before.y)


def test_labels_name_each_lead(leads):
    scales = build_scales(leads)
    labels = lead_labels(scales, leads)

    assert [label.text for label in labels] == ["Lead I", "Lead II"]
    assert all(label.x == 10 for label in labels)
    assert labels[0].y == pytest.approx(scales.voltage_scale(9.0) + 56)
    assert labels[1].y == pytest.approx(scales.voltage_scale(6.0) + 56)


def test_scene_holds_every_primitive(leads):
    scales = build_scales(leads)
    scene = build_scene(scales, leads)

    assert len(scene.polylines) == 2
    assert len(scene.labels) == 2
    assert len(scene.gridlines) == (scales.num_x_grids + 1) + (scales.num_y_grids + 1)
    assert scene.time_domain == scales.full_time_domain
    assert scene.geometry == scales.geometry
