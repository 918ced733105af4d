"""Utility functions for the ECG strip chart"""
from pathlib import Path
from typing import Tuple
from pint import UnitRegistry

# Initialize Pint unit registry
ureg = UnitRegistry()


def get_version() -> str:
    """
    Get the application version from version.txt.

    Returns:
        str: Version string (e.g., "1.0.0") or "unknown" if not found
    """
    # Look for version.txt in the project root (parent of ecg_strip package)
    version_file = Path(__file__).parent.parent / "version.txt"
    try:
        return version_file.read_text().strip()
    except OSError:
        return "unknown"


def format_time_auto(time_quantity, precision=4) -> str:
    """
    Format a duration with a readable unit.

    For example:
        - 0.04 s -> "40 ms"
        - 12.5 s -> "12.5 s"

    Args:
        time_quantity: Pint Quantity in time units, or float (assumed seconds)
        precision: Number of significant figures (default: 4)

    Returns:
        str: Formatted time string like "40 ms" or "2.5 s"
    """
    if not isinstance(time_quantity, ureg.Quantity):
        time_quantity = time_quantity * ureg.second

    time_in_seconds = time_quantity.to(ureg.second).magnitude

    if time_in_seconds != 0 and abs(time_in_seconds) < 1:
        formatted = time_quantity.to(ureg.millisecond)
        return f"{formatted.magnitude:.{precision}g} ms"
    formatted = time_quantity.to(ureg.second)
    return f"{formatted.magnitude:.{precision}g} s"


def format_time_window(domain: Tuple[float, float], precision=4) -> str:
    """Format a visible time window given in seconds, e.g. "1 s to 2 s (1 s)" """
    start, end = domain
    return (
        f"{format_time_auto(start, precision)} to {format_time_auto(end, precision)} "
        f"({format_time_auto(end - start, precision)})"
    )


def boxes_in_window(domain: Tuple[float, float], box_seconds: float) -> float:
    """Number of small boxes spanned by a time window"""
    width = (domain[1] - domain[0]) * ureg.second
    return (width / (box_seconds * ureg.second)).to(ureg.dimensionless).magnitude
