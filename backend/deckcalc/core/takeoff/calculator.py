"""Fastener takeoff: board rows, joists and clip counts from the deck bounds.

Boards always run perpendicular to the joists. With the joists in their
default orientation the boards run along the bounding width B and the rows
are counted across the height H; rotating the joists 90° swaps B and H for
both the boards and the joists.

Every intersection of a board row with a joist gets one clip. Counts use
the bounding box only; the sketch area is reported but never used to
derive rows or joists.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from deckcalc.core.geometry.kernel import BoundingBox, polygon_area_and_perimeter
from deckcalc.utils.units import INCHES_PER_FOOT, round_to

# Smallest divisor used for the board module and joist spacing.
MIN_DIVISOR_IN = 0.01

DEFAULT_DECK_WIDTH_FT = 20.0
DEFAULT_DECK_HEIGHT_FT = 13.0


@dataclass(frozen=True)
class TakeoffParameters:
    board_width_in: float = 5.5
    gap_in: float = 0.25
    joist_spacing_in: float = 16.0  # on-center
    joists_rotated: bool = False
    waste_factor: float = 1.05

    @property
    def module_in(self) -> float:
        """Board width plus one gap: the pitch between board rows."""
        return self.board_width_in + self.gap_in


@dataclass(frozen=True)
class TakeoffResult:
    board_rows: int
    joist_count: int
    clips_no_waste: int
    clips_with_waste: int
    area_sq_ft: float
    board_run_ft: float
    across_span_ft: float
    joist_span_ft: float
    deck_width_ft: float   # B
    deck_height_ft: float  # H

    def to_dict(self) -> dict:
        return {
            "board_rows": self.board_rows,
            "joist_count": self.joist_count,
            "clips_no_waste": self.clips_no_waste,
            "clips_with_waste": self.clips_with_waste,
            "area_sq_ft": round_to(self.area_sq_ft, 2),
            "board_run_ft": self.board_run_ft,
            "across_span_ft": self.across_span_ft,
            "joist_span_ft": self.joist_span_ft,
            "deck_width_ft": self.deck_width_ft,
            "deck_height_ft": self.deck_height_ft,
        }


def _whole(value: float) -> int:
    """floor() that maps NaN and infinities to 0 so counts stay integers."""
    return math.floor(value) if math.isfinite(value) else 0


def board_rows_across(across_ft: float, board_width_in: float, gap_in: float) -> int:
    """Rows of boards that fit across a span.

    The numerator carries one extra gap since the last board needs none.
    """
    module = max(board_width_in + gap_in, MIN_DIVISOR_IN)
    return _whole((across_ft * INCHES_PER_FOOT + gap_in) / module)


def joist_count(span_ft: float, spacing_in: float) -> int:
    """Joists at each on-center interval plus the one at the starting edge."""
    spacing = max(spacing_in, MIN_DIVISOR_IN)
    return _whole(span_ft * INCHES_PER_FOOT / spacing) + 1


def apply_waste(count: int, waste_factor: float) -> int:
    # Round first so that e.g. 140 * 1.05 = 147.00000000000003 stays 147.
    return -_whole(-round(count * waste_factor, 9))


def deck_dimensions(
    bbox: BoundingBox,
    default_width: float = DEFAULT_DECK_WIDTH_FT,
    default_height: float = DEFAULT_DECK_HEIGHT_FT,
) -> tuple[float, float]:
    """B and H for counting; a zero dimension falls back to the default deck."""
    return bbox.width or default_width, bbox.height or default_height


def calculate_takeoff(
    width_ft: float,
    height_ft: float,
    params: TakeoffParameters,
    area_sq_ft: float | None = None,
) -> TakeoffResult:
    """Derive counts from the deck's bounding B (width) and H (height).

    ``area_sq_ft`` defaults to the B × H rectangle when no sketch area is
    available.
    """
    if params.joists_rotated:
        board_run, across = height_ft, width_ft
    else:
        board_run, across = width_ft, height_ft
    joist_span = across

    rows = board_rows_across(across, params.board_width_in, params.gap_in)
    joists = joist_count(joist_span, params.joist_spacing_in)
    clips = rows * joists

    return TakeoffResult(
        board_rows=rows,
        joist_count=joists,
        clips_no_waste=clips,
        clips_with_waste=apply_waste(clips, params.waste_factor),
        area_sq_ft=width_ft * height_ft if area_sq_ft is None else area_sq_ft,
        board_run_ft=board_run,
        across_span_ft=across,
        joist_span_ft=joist_span,
        deck_width_ft=width_ft,
        deck_height_ft=height_ft,
    )


def takeoff_for_outline(
    points: Sequence[Sequence[float]],
    params: TakeoffParameters,
    default_width: float = DEFAULT_DECK_WIDTH_FT,
    default_height: float = DEFAULT_DECK_HEIGHT_FT,
) -> TakeoffResult:
    """Full pipeline from a sketch outline to a takeoff.

    Outlines with fewer than 3 points are counted as the default deck
    rectangle and report that rectangle's area.
    """
    metrics = polygon_area_and_perimeter(points)
    width, height = deck_dimensions(metrics.bounding_box, default_width, default_height)
    area = metrics.area if len(points) >= 3 else None
    return calculate_takeoff(width, height, params, area_sq_ft=area)
