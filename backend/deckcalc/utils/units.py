"""Unit conversion and label formatting. Internal representation is always feet."""

from __future__ import annotations

import math

INCHES_PER_FOOT = 12.0


def in_to_ft(value: float) -> float:
    """Convert inches to feet."""
    return value / INCHES_PER_FOOT


def ft_to_in(value: float) -> float:
    """Convert feet to inches."""
    return value * INCHES_PER_FOOT


def round_to(value: float, digits: int = 2) -> float:
    """Round half-up (away from the half toward +inf), not banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _trim(value: float, digits: int = 2) -> str:
    text = f"{round_to(value, digits):.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_feet(value: float) -> str:
    """Feet label as shown on segment lengths and readouts, e.g. ``12.5'``."""
    return f"{_trim(value)}'"


def format_inches_fraction(value: float, denominator: int = 16) -> str:
    """Inch label rounded to the nearest 1/16", e.g. ``5 1/2"``."""
    sign = "-" if value < 0 else ""
    value = abs(value)
    whole = math.floor(value + 1e-9)
    ticks = math.floor((value - whole) * denominator + 0.5)
    if ticks == 0:
        return f'{sign}{whole}"'
    if ticks == denominator:
        return f'{sign}{whole + 1}"'
    g = math.gcd(ticks, denominator)
    prefix = f"{whole} " if whole else ""
    return f'{sign}{prefix}{ticks // g}/{denominator // g}"'


def grid_label(step_inches: float) -> str:
    """Label for the grid tile size, e.g. ``12" (1 ft)``."""
    return f'{_trim(step_inches)}" ({_trim(in_to_ft(step_inches))} ft)'
