"""Pure geometry on deck outlines: area, perimeter, bounds, snapping.

All coordinates are in feet. Functions never mutate their inputs and never
raise for degenerate input: an outline with fewer than 3 points has no
interior and reports zero area and perimeter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

from deckcalc.utils.units import in_to_ft

# Fallback length for a zero-length segment so the direction never divides by 0.
_MIN_SEGMENT_LENGTH = 1e-9


class Point(NamedTuple):
    """A vertex of the deck outline, in feet."""

    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_dict(self) -> dict:
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class PolygonMetrics:
    area: float
    perimeter: float
    bounding_box: BoundingBox


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def midpoint(a: Sequence[float], b: Sequence[float]) -> Point:
    return Point((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def bounding_box(points: Sequence[Sequence[float]]) -> BoundingBox:
    """Axis-aligned bounds of all points (zero box for an empty sequence)."""
    if not points:
        return BoundingBox()
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return BoundingBox(min(xs), min(ys), max(xs), max(ys))


def edge_count(points: Sequence[Sequence[float]]) -> int:
    """Number of defined edges.

    A closed outline (3+ points) has one edge per vertex including the
    closing edge; an open two-point path has the single segment only.
    """
    n = len(points)
    if n >= 3:
        return n
    return 1 if n == 2 else 0


def edges(points: Sequence[Sequence[float]]) -> list[tuple[Point, Point]]:
    """The defined edges as (start, end) pairs, in vertex order."""
    n = len(points)
    return [
        (Point(*points[i]), Point(*points[(i + 1) % n]))
        for i in range(edge_count(points))
    ]


def polygon_area_and_perimeter(points: Sequence[Sequence[float]]) -> PolygonMetrics:
    """Shoelace area, closed perimeter and bounding box of an outline.

    Fewer than 3 points report zeros everywhere, including the bounding
    box: an open path has no perimeter in this sense, not a partial one.
    The result does not depend on the starting vertex or winding direction.
    """
    n = len(points)
    if n < 3:
        return PolygonMetrics(area=0.0, perimeter=0.0, bounding_box=BoundingBox())

    twice_area = 0.0
    perimeter = 0.0
    for i in range(n):
        x1, y1 = points[i][0], points[i][1]
        x2, y2 = points[(i + 1) % n][0], points[(i + 1) % n][1]
        twice_area += x1 * y2 - x2 * y1
        perimeter += math.hypot(x2 - x1, y2 - y1)

    return PolygonMetrics(
        area=abs(twice_area) / 2,
        perimeter=perimeter,
        bounding_box=bounding_box(points),
    )


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def snap_to_grid(point: Sequence[float], step_inches: float) -> Point:
    """Round each coordinate to the nearest multiple of the grid step.

    Ties at exactly half a step round up (toward +inf).
    """
    step = in_to_ft(step_inches)
    return Point(
        _round_half_up(point[0] / step) * step,
        _round_half_up(point[1] / step) * step,
    )


def adjust_segment_endpoint(
    a: Sequence[float],
    b: Sequence[float],
    new_length: float,
) -> Point:
    """Move ``b`` along the a→b direction so the segment is ``new_length`` long.

    ``a`` stays fixed. When ``a`` and ``b`` coincide the direction is the
    zero vector and the result collapses onto ``a``.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    d = math.hypot(dx, dy) or _MIN_SEGMENT_LENGTH
    return Point(a[0] + dx / d * new_length, a[1] + dy / d * new_length)
