"""Bridge between a sketch outline and the takeoff/layout/export pipeline."""

from __future__ import annotations

from typing import Sequence

from deckcalc.config import settings
from deckcalc.core.exporter.dxf_writer import DXFExporter, write_deck
from deckcalc.core.geometry.kernel import polygon_area_and_perimeter
from deckcalc.core.takeoff.calculator import TakeoffParameters, takeoff_for_outline
from deckcalc.core.takeoff.layout import DeckLayout, build_layout
from deckcalc.core.validation import check_outline, check_parameters
from deckcalc.utils.units import format_feet, in_to_ft, round_to


def _takeoff(points: Sequence[Sequence[float]], params: TakeoffParameters):
    return takeoff_for_outline(
        points,
        params,
        default_width=settings.default_deck_width_ft,
        default_height=settings.default_deck_height_ft,
    )


def sketch_readouts(points: Sequence[Sequence[float]]) -> dict:
    """Area, perimeter, bounding B/H and vertex count of the raw sketch."""
    m = polygon_area_and_perimeter(points)
    return {
        "area_sq_ft": round_to(m.area, 2),
        "perimeter_ft": round_to(m.perimeter, 2),
        "bounding_width_ft": m.bounding_box.width,
        "bounding_height_ft": m.bounding_box.height,
        "vertex_count": len(points),
    }


def build_takeoff_response(
    points: Sequence[Sequence[float]],
    params: TakeoffParameters,
) -> dict:
    result = _takeoff(points, params)
    takeoff = result.to_dict()
    takeoff["board_run_label"] = format_feet(result.board_run_ft)
    issues = check_outline(points) + check_parameters(params)
    return {
        "takeoff": takeoff,
        "sketch": sketch_readouts(points),
        "issues": [i.to_dict() for i in issues],
    }


def build_deck_layout(
    points: Sequence[Sequence[float]],
    params: TakeoffParameters,
) -> DeckLayout:
    return build_layout(points, params, _takeoff(points, params))


def export_deck_dxf(
    points: Sequence[Sequence[float]],
    params: TakeoffParameters,
    grid_inches: float | None = None,
) -> bytes:
    result = _takeoff(points, params)
    layout = build_layout(points, params, result)
    exporter = DXFExporter(unit="ft")
    write_deck(
        exporter,
        points,
        params,
        result,
        layout,
        grid_ft=in_to_ft(grid_inches) if grid_inches else None,
    )
    return exporter.to_bytes()
