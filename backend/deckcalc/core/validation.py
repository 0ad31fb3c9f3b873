"""Non-fatal checks on the sketch and the takeoff parameters.

The calculator never raises: a degenerate outline falls back to the default
deck rectangle and zero divisors are clamped. This module reports those
degradations so the presentation layer can flag them to the user.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

from shapely.geometry import Polygon
from shapely.validation import explain_validity

from deckcalc.core.takeoff.calculator import MIN_DIVISOR_IN, TakeoffParameters


class ValidationSeverity(Enum):
    ERROR = auto()    # result is meaningless
    WARNING = auto()  # result uses a fallback or a clamped value
    INFO = auto()     # informational only


@dataclass
class Issue:
    severity: ValidationSeverity
    code: str
    message: str
    location: tuple[float, float] | None = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.name.lower(),
            "code": self.code,
            "message": self.message,
            "location": list(self.location) if self.location else None,
        }


# ── Outline ─────────────────────────────────────────────────────────────

def check_outline(points: Sequence[Sequence[float]]) -> list[Issue]:
    """Problems with the sketch that change how the takeoff is computed."""
    issues: list[Issue] = []

    if len(points) < 3:
        issues.append(Issue(
            ValidationSeverity.WARNING,
            "OPEN_OUTLINE",
            f"Outline has {len(points)} point(s); counts use the default deck rectangle",
        ))
        return issues

    for i in range(len(points)):
        a, b = points[i], points[(i + 1) % len(points)]
        if a[0] == b[0] and a[1] == b[1]:
            issues.append(Issue(
                ValidationSeverity.INFO,
                "ZERO_LENGTH_EDGE",
                f"Edge {i} has zero length at ({a[0]}, {a[1]})",
                location=(a[0], a[1]),
            ))

    if len({tuple(p) for p in points}) < 3:
        issues.append(Issue(
            ValidationSeverity.WARNING,
            "DEGENERATE_OUTLINE",
            "Fewer than 3 distinct points; outline has no area",
        ))
        return issues

    poly = Polygon(points)
    if not poly.is_valid:
        issues.append(Issue(
            ValidationSeverity.WARNING,
            "SELF_INTERSECTING",
            f"Outline is not a simple polygon: {explain_validity(poly)}",
        ))
    elif poly.area == 0:
        issues.append(Issue(
            ValidationSeverity.WARNING,
            "ZERO_AREA",
            "All points are collinear; outline has no area",
        ))

    return issues


# ── Parameters ──────────────────────────────────────────────────────────

def check_parameters(params: TakeoffParameters) -> list[Issue]:
    """Flag inputs the calculator had to clamp or that make counts meaningless."""
    issues: list[Issue] = []

    values = {
        "board_width_in": params.board_width_in,
        "gap_in": params.gap_in,
        "joist_spacing_in": params.joist_spacing_in,
        "waste_factor": params.waste_factor,
    }
    for name, value in values.items():
        if not math.isfinite(value):
            issues.append(Issue(
                ValidationSeverity.ERROR,
                "NON_FINITE_PARAMETER",
                f"{name} is not a finite number ({value})",
            ))
    if issues:
        return issues

    if params.module_in < MIN_DIVISOR_IN:
        issues.append(Issue(
            ValidationSeverity.WARNING,
            "MODULE_CLAMPED",
            f"Board width + gap is {params.module_in}\"; clamped to {MIN_DIVISOR_IN}\"",
        ))
    if params.joist_spacing_in < MIN_DIVISOR_IN:
        issues.append(Issue(
            ValidationSeverity.WARNING,
            "SPACING_CLAMPED",
            f"Joist spacing is {params.joist_spacing_in}\"; clamped to {MIN_DIVISOR_IN}\"",
        ))
    if params.board_width_in <= 0:
        issues.append(Issue(
            ValidationSeverity.WARNING,
            "NON_POSITIVE_BOARD_WIDTH",
            "Board width should be positive",
        ))
    if params.gap_in < 0:
        issues.append(Issue(
            ValidationSeverity.WARNING,
            "NEGATIVE_GAP",
            "Board gap should not be negative",
        ))
    if params.waste_factor < 1:
        issues.append(Issue(
            ValidationSeverity.WARNING,
            "WASTE_BELOW_ONE",
            f"Waste factor {params.waste_factor} orders fewer clips than counted",
        ))

    return issues
