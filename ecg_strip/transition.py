"""Eased transitions between two renderings of the same trace"""
from typing import Optional, Tuple

import numpy as np


def ease_cubic_in_out(t: float) -> float:
    """Cubic ease-in-out on [0, 1]"""
    t = min(max(t, 0.0), 1.0)
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


class PolylineTransition:
    """
    Interpolates a trace from the geometry currently on screen to a target.

    A trace only animates when both ends have the same number of points;
    otherwise the target is applied at once.
    """

    def __init__(self, start: Optional[Tuple[np.ndarray, np.ndarray]],
                 end: Tuple[np.ndarray, np.ndarray], duration_ms: int):
        self.end_x = np.asarray(end[0], dtype=float)
        self.end_y = np.asarray(end[1], dtype=float)
        self.duration_ms = duration_ms
        if start is not None and len(start[0]) == len(self.end_x) and duration_ms > 0:
            self.start_x = np.asarray(start[0], dtype=float)
            self.start_y = np.asarray(start[1], dtype=float)
        else:
            self.start_x = self.end_x
            self.start_y = self.end_y

    @property
    def is_instant(self) -> bool:
        return self.start_x is self.end_x

    def frame(self, elapsed_ms: float) -> Tuple[np.ndarray, np.ndarray]:
        """Geometry to show elapsed_ms after the transition started"""
        if self.is_instant or elapsed_ms >= self.duration_ms:
            return self.end_x, self.end_y
        k = ease_cubic_in_out(elapsed_ms / self.duration_ms)
        return (
            self.start_x + (self.end_x - self.start_x) * k,
            self.start_y + (self.end_y - self.start_y) * k,
        )

    def finished(self, elapsed_ms: float) -> bool:
        return self.is_instant or elapsed_ms >= self.duration_ms
