"""Brush zoom and double-click reset for the ECG strip chart"""
from enum import Enum
from typing import Callable, Optional, Protocol, Tuple
import logging
import math

from .constants import MIN_ZOOM_WIDTH, TRANSITION_DURATION_MS
from .exceptions import InvalidZoomFactorError
from .models import Gridline, Polyline, RearrangedLeadSet, Scene, TextLabel, WaveformBuffer
from .reorder import rearrange_buffer
from .scales import Scales, build_scales
from .scene import build_scene

logger = logging.getLogger(__name__)

BrushSelection = Optional[Tuple[float, float]]


class RenderSurface(Protocol):
    """Drawing capabilities the controller needs from its host"""

    def clear(self, group: Optional[str] = None) -> None:
        """Remove every drawn item, or only those of one group ('grid', 'trace', 'label')"""

    def set_size(self, width: float, height: float) -> None: ...

    def draw_gridline(self, gridline: Gridline) -> None: ...

    def draw_polyline(self, polyline: Polyline, duration_ms: int = 0) -> None:
        """Draw or update the trace with this key, animating over duration_ms"""

    def draw_text(self, label: TextLabel) -> None: ...

    def clear_brush(self) -> None: ...

    def listen_for_drag(self, callback: Callable[[BrushSelection], None]) -> None: ...

    def listen_for_double_click(self, callback: Callable[[], None]) -> None: ...


class ZoomState(Enum):
    OVERVIEW = "overview"
    ZOOMED = "zoomed"


def parse_zoom_factor(zoom_factor: str) -> float:
    """
    Parse a toolbar zoom factor such as "2", "1.5x" or "4X".

    Raises:
        InvalidZoomFactorError: if the text is not a finite number >= 1
    """
    text = str(zoom_factor).strip()
    if text[-1:] in ('x', 'X'):
        text = text[:-1].strip()
    try:
        factor = float(text)
    except ValueError:
        raise InvalidZoomFactorError(f"Zoom factor {zoom_factor!r} is not a number") from None
    if not math.isfinite(factor) or factor < 1:
        raise InvalidZoomFactorError(f"Zoom factor {zoom_factor!r} must be a number >= 1")
    return factor


class ZoomController:
    """
    Owns the chart's time scale and redraws the surface when it changes.

    Brushing narrows the time domain by inverting the brushed pixels through
    the current scale, so a second brush while zoomed narrows further.
    Double-click always returns to the domain computed at render time.
    """

    def __init__(self, surface: RenderSurface,
                 on_domain_changed: Optional[Callable[[Tuple[float, float], ZoomState], None]] = None):
        self.surface = surface
        self.on_domain_changed = on_domain_changed
        self.scales: Optional[Scales] = None
        self.leads = RearrangedLeadSet()
        self.state = ZoomState.OVERVIEW

        surface.listen_for_drag(self.on_brush_end)
        surface.listen_for_double_click(self.on_double_click)

    @property
    def time_domain(self) -> Optional[Tuple[float, float]]:
        return self.scales.time_scale.domain if self.scales else None

    @property
    def full_time_domain(self) -> Optional[Tuple[float, float]]:
        return self.scales.full_time_domain if self.scales else None

    @property
    def has_data(self) -> bool:
        return self.scales is not None and not self.leads.is_empty

    def render(self, waveform: Optional[WaveformBuffer]) -> Scene:
        """
        Full render: clear the surface and draw the chart from scratch.

        Args:
            waveform: Recording to draw, or None for an empty chart

        Raises:
            MalformedWaveformError: if the buffer and channels do not line up.
                The surface is left untouched in that case.
        """
        leads = rearrange_buffer(waveform) if waveform is not None else RearrangedLeadSet()
        scales = build_scales(leads)

        self.surface.clear()
        self.leads = leads
        self.scales = scales
        self.state = ZoomState.OVERVIEW

        geometry = scales.geometry
        self.surface.set_size(geometry.width, geometry.height)
        scene = build_scene(scales, leads)
        self._draw(scene, duration_ms=0)

        logger.debug(
            "Rendered %d lead(s), time domain %s, chart %gx%g px",
            len(leads), scales.full_time_domain, geometry.chart_width, geometry.chart_height
        )
        self._notify()
        return scene

    def on_brush_end(self, selection: BrushSelection) -> None:
        """Zoom into the brushed pixel extent; empty selections are ignored"""
        if not self.has_data or selection is None:
            logger.debug("Ignoring brush without selection")
            return

        x0, x1 = sorted(selection)
        if x1 - x0 <= 0:
            logger.debug("Ignoring collapsed brush at %g px", x0)
            return

        time_scale = self.scales.time_scale
        new_domain = (time_scale.invert(x0), time_scale.invert(x1))
        self._apply_domain(new_domain)
        self.surface.clear_brush()

    def on_double_click(self) -> None:
        """Return to the full recording"""
        if not self.has_data:
            return
        self._apply_domain(self.scales.full_time_domain)

    def zoom_in(self, zoom_factor: str) -> None:
        """Divide the visible time width by zoom_factor about its centre"""
        factor = parse_zoom_factor(zoom_factor)
        if not self.has_data:
            return
        d0, d1 = self.time_domain
        centre = (d0 + d1) / 2
        # Never narrower than MIN_ZOOM_WIDTH, and never wider than the current view
        width = max((d1 - d0) / factor, min(MIN_ZOOM_WIDTH, d1 - d0))
        self._apply_domain((centre - width / 2, centre + width / 2))

    def zoom_out(self, zoom_factor: str) -> None:
        """Multiply the visible time width by zoom_factor, staying inside the recording"""
        factor = parse_zoom_factor(zoom_factor)
        if not self.has_data:
            return
        full0, full1 = self.full_time_domain
        d0, d1 = self.time_domain
        width = (d1 - d0) * factor
        if width >= full1 - full0:
            self._apply_domain(self.scales.full_time_domain)
            return

        centre = (d0 + d1) / 2
        new0, new1 = centre - width / 2, centre + width / 2
        if new0 < full0:
            new0, new1 = full0, full0 + width
        elif new1 > full1:
            new0, new1 = full1 - width, full1
        self._apply_domain((new0, new1))

    def _apply_domain(self, domain: Tuple[float, float]) -> None:
        """Replace the time domain and redraw the grid and traces"""
        self.scales.time_scale.domain = domain
        if self.scales.time_scale.domain == self.scales.full_time_domain:
            self.state = ZoomState.OVERVIEW
        else:
            self.state = ZoomState.ZOOMED

        scene = build_scene(self.scales, self.leads)
        # The number of visible boxes changes, so the grid is rebuilt rather than moved
        self.surface.clear('grid')
        self._draw(scene, duration_ms=TRANSITION_DURATION_MS)

        logger.debug("Time domain now [%.4f, %.4f] s (%s)", domain[0], domain[1], self.state.value)
        self._notify()

    def _draw(self, scene: Scene, duration_ms: int) -> None:
        for gridline in scene.gridlines:
            self.surface.draw_gridline(gridline)
        for polyline in scene.polylines:
            self.surface.draw_polyline(polyline, duration_ms)
        for label in scene.labels:
            self.surface.draw_text(label)

    def _notify(self) -> None:
        if self.on_domain_changed is not None and self.scales is not None:
            self.on_domain_changed(self.scales.time_scale.domain, self.state)
