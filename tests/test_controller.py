import numpy as np
import pytest

from ecg_strip.constants import MIN_ZOOM_WIDTH
from ecg_strip.controller import ZoomController, ZoomState, parse_zoom_factor
from ecg_strip.exceptions import InvalidZoomFactorError, MalformedWaveformError
from ecg_strip.models import Channel, WaveformBuffer

from conftest import make_waveform


@pytest.fixture
def controller(surface, three_leads):
    controller = ZoomController(surface)
    controller.render(three_leads)
    return controller


def test_controller_registers_gesture_listeners(surface):
    controller = ZoomController(surface)
    assert surface.drag_callbacks == [controller.on_brush_end]
    assert surface.double_click_callbacks == [controller.on_double_click]


def test_missing_data_renders_empty_chart(surface):
    controller = ZoomController(surface)
    scene = controller.render(None)

    assert scene.polylines == []
    assert surface.items['trace'] == {}
    assert surface.size == (10, 10)
    assert not controller.has_data


def test_unmatched_channels_render_empty_chart(surface):
    controller = ZoomController(surface)
    controller.render(make_waveform(["Pleth", "Resp"]))

    assert surface.items['trace'] == {}
    controller.on_brush_end((0, 100))
    controller.on_double_click()
    assert surface.items['trace'] == {}


def test_render_draws_every_lead(controller, surface):
    assert list(surface.items['trace']) == ["lead-I", "lead-II", "lead-V1"]
    assert [label.text for label in surface.items['label'].values()] == ["Lead I", "Lead II", "Lead V1"]
    assert set(surface.durations.values()) == {0}
    assert surface.size == (810, 730)
    assert controller.state == ZoomState.OVERVIEW


def test_rendering_twice_leaves_a_single_drawing(controller, surface, three_leads):
    first = {group: dict(items) for group, items in surface.items.items()}
    controller.render(three_leads)

    assert surface.clear_calls.count(None) == 2
    for group in surface.GROUPS:
        assert list(surface.items[group]) == list(first[group])
    assert list(surface.items['grid'].values()) == list(first['grid'].values())
    for key, polyline in surface.items['trace'].items():
        np.testing.assert_array_equal(polyline.x, first['trace'][key].x)
        np.testing.assert_array_equal(polyline.y, first['trace'][key].y)


def test_malformed_input_is_rejected_without_touching_surface(controller, surface):
    drawn = dict(surface.items['trace'])
    bad = WaveformBuffer(channels=[Channel("I", 250.0)], buffer=[[0.0], [0.0]])

    with pytest.raises(MalformedWaveformError):
        controller.render(bad)
    assert surface.items['trace'] == drawn


def test_brush_zooms_into_selected_window(controller, surface):
    x0 = controller.scales.time_scale(1.0)
    x1 = controller.scales.time_scale(2.0)
    surface.drag((x0, x1))

    assert controller.time_domain == pytest.approx((1.0, 2.0))
    assert controller.state == ZoomState.ZOOMED
    assert surface.brush_clears == 1
    assert surface.clear_calls[-1] == 'grid'
    assert set(surface.durations.values()) == {1000}
    vertical = [key for key in surface.items['grid'] if key.startswith("x-grid")]
    assert vertical[0] == "x-grid-25"
    assert vertical[-1] == "x-grid-50"
    assert surface.items['trace']["lead-I"].x[250] == pytest.approx(0.0)


def test_brush_selection_order_does_not_matter(controller, surface):
    surface.drag((400.0, 200.0))
    assert controller.time_domain == pytest.approx((1.0, 2.0))


def test_double_click_restores_exact_original_domain(controller, surface):
    original = controller.time_domain
    surface.drag((controller.scales.time_scale(1.0), controller.scales.time_scale(2.0)))
    surface.double_click()

    assert controller.time_domain == original
    assert controller.time_domain[1] == controller.full_time_domain[1]
    assert controller.state == ZoomState.OVERVIEW
    vertical = [key for key in surface.items['grid'] if key.startswith("x-grid")]
    assert len(vertical) == controller.scales.num_x_grids + 1


@pytest.mark.parametrize("selection", [None, (300.0, 300.0)])
def test_degenerate_brush_changes_nothing(controller, surface, selection):
    domain = controller.time_domain
    traces = dict(surface.items['trace'])

    surface.drag(selection)

    assert controller.time_domain == domain
    assert controller.state == ZoomState.OVERVIEW
    assert surface.brush_clears == 0
    for key, polyline in surface.items['trace'].items():
        assert polyline is traces[key]


def test_successive_brushes_compose(controller, surface):
    surface.drag((200.0, 400.0))
    surface.drag((0.0, 400.0))
    assert controller.time_domain == pytest.approx((1.0, 1.5))


def test_toolbar_zoom_in_and_out(controller):
    controller.zoom_in("2x")
    assert controller.time_domain == pytest.approx((1.0, 3.0))
    assert controller.state == ZoomState.ZOOMED

    controller.zoom_out("2")
    assert controller.time_domain == controller.full_time_domain
    assert controller.state == ZoomState.OVERVIEW


def test_zoom_out_stays_inside_recording(controller, surface):
    surface.drag((0.0, 200.0))
    controller.zoom_out("2")
    assert controller.time_domain == pytest.approx((0.0, 2.0))


def test_zoom_out_past_full_width_clamps_to_full_domain(controller):
    controller.zoom_out("4x")
    assert controller.time_domain == controller.full_time_domain


def test_zoom_on_empty_chart_is_ignored(surface):
    controller = ZoomController(surface)
    controller.render(None)
    controller.zoom_in("2")
    controller.zoom_out("2")
    assert surface.items['trace'] == {}


@pytest.mark.parametrize("text,expected", [("2", 2.0), ("1.5x", 1.5), (" 4X ", 4.0), ("1", 1.0)])
def test_parse_zoom_factor(text, expected):
    assert parse_zoom_factor(text) == expected


@pytest.mark.parametrize("text", ["", "x", "abc", "0.5", "-2", "inf", "nan"])
def test_invalid_zoom_factor_is_rejected(controller, text):
    with pytest.raises(InvalidZoomFactorError):
        controller.zoom_in(text)


def test_domain_listener_is_told_about_changes(surface, three_leads):
    seen = []
    controller = ZoomController(surface, on_domain_changed=lambda domain, state: seen.append((domain, state)))
    controller.render(three_leads)
    surface.drag((200.0, 400.0))
    surface.double_click()

    assert [state for _, state in seen] == [ZoomState.OVERVIEW, ZoomState.ZOOMED, ZoomState.OVERVIEW]
    assert seen[1][0] == pytest.approx((1.0, 2.0))


def test_huge_zoom_factor_stops_at_minimum_width(controller):
    controller.zoom_in("1e300")
    d0, d1 = controller.time_domain
    assert d1 - d0 == pytest.approx(MIN_ZOOM_WIDTH)
    assert (d0 + d1) / 2 == pytest.approx(2.0)

    controller.zoom_in("4x")
    assert controller.time_domain == pytest.approx((d0, d1))
