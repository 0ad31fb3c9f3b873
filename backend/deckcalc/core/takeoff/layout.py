"""Board and joist layout clipped to the deck outline (the parametric preview)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from shapely.geometry import LineString, MultiLineString, MultiPolygon, Polygon, box, mapping
from shapely.validation import make_valid

from deckcalc.core.takeoff.calculator import TakeoffParameters, TakeoffResult
from deckcalc.utils.units import in_to_ft


@dataclass
class DeckLayout:
    """Clipped board strips and joist lines, in feet."""

    outline: Polygon
    boards: list[Polygon] = field(default_factory=list)
    joists: list[LineString] = field(default_factory=list)
    boards_along_width: bool = True

    def to_dict(self) -> dict:
        return {
            "outline": [list(c) for c in self.outline.exterior.coords],
            "boards_along_width": self.boards_along_width,
            "boards": [mapping(b) for b in self.boards],
            "joists": [mapping(j) for j in self.joists],
        }


def outline_polygon(
    points: Sequence[Sequence[float]],
    width_ft: float,
    height_ft: float,
) -> Polygon:
    """Polygon to clip against: the sketch, or the B × H rectangle for open paths.

    Self-intersecting sketches are repaired and the largest piece kept.
    """
    fallback = box(0, 0, width_ft, height_ft)
    if len({tuple(p) for p in points}) < 3:
        return fallback
    poly = Polygon(points)
    if not poly.is_valid:
        polys = []
        for part in _pieces(make_valid(poly)):
            if isinstance(part, MultiPolygon):
                polys.extend(part.geoms)
            elif isinstance(part, Polygon):
                polys.append(part)
        if not polys:
            return fallback
        poly = max(polys, key=lambda p: p.area)
    if poly.area == 0:
        return fallback
    return poly


def _pieces(geom) -> list:
    """Flatten a clip result into its non-empty parts."""
    if geom.is_empty:
        return []
    if isinstance(geom, (MultiPolygon, MultiLineString)) or geom.geom_type == "GeometryCollection":
        return [g for g in geom.geoms if not g.is_empty]
    return [geom]


def build_layout(
    points: Sequence[Sequence[float]],
    params: TakeoffParameters,
    result: TakeoffResult,
) -> DeckLayout:
    """Lay out ``max(1, rows)`` board strips and ``joist_count`` joist lines.

    Strips start at the outline's minimum corner and repeat at the board
    module; joists repeat at the on-center spacing along the same span the
    rows are counted across. Both are clipped to the outline.
    """
    outline = outline_polygon(points, result.deck_width_ft, result.deck_height_ft)
    min_x, min_y, max_x, max_y = outline.bounds
    along_width = not params.joists_rotated

    module_ft = in_to_ft(params.module_in)
    board_ft = in_to_ft(params.board_width_in)
    boards: list[Polygon] = []
    for k in range(max(1, result.board_rows)):
        off = k * module_ft
        if along_width:
            strip = box(min_x, min_y + off, max_x, min_y + off + board_ft)
        else:
            strip = box(min_x + off, min_y, min_x + off + board_ft, max_y)
        boards.extend(p for p in _pieces(strip.intersection(outline)) if isinstance(p, Polygon))

    spacing_ft = in_to_ft(params.joist_spacing_in)
    joists: list[LineString] = []
    for j in range(result.joist_count):
        off = j * spacing_ft
        if along_width:
            line = LineString([(min_x, min_y + off), (max_x, min_y + off)])
        else:
            line = LineString([(min_x + off, min_y), (min_x + off, max_y)])
        joists.extend(p for p in _pieces(line.intersection(outline)) if isinstance(p, LineString))

    return DeckLayout(outline=outline, boards=boards, joists=joists, boards_along_width=along_width)
