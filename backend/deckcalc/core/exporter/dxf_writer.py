"""DXF export engine: deck outline, board strips, joists and the takeoff note.

Drawing units are feet. Entity structure per element:
  Outline: LWPOLYLINE (closed for 3+ points)
  Board:   LWPOLYLINE per clipped strip
  Joist:   LINE per clipped piece
  Grid:    LINE on the non-printing A-GRID layer
  Dims:    DIMENSION entities for B and H
  Note:    MTEXT with the clip takeoff
"""

from __future__ import annotations

import io
from typing import Sequence

import ezdxf
from shapely.geometry import LineString, Polygon

from deckcalc.core.exporter.dxf_layers import (
    CUSTOM_LINETYPES, DXF_UNITS, LAYERS, TEXT_STYLES,
)
from deckcalc.core.takeoff.calculator import TakeoffParameters, TakeoffResult
from deckcalc.core.takeoff.layout import DeckLayout
from deckcalc.utils.units import format_feet, format_inches_fraction


class DXFExporter:
    """Builds a DXF document for one deck."""

    def __init__(self, unit: str = "ft"):
        self.doc = ezdxf.new("R2010", setup=True)
        self.msp = self.doc.modelspace()
        self.unit = unit

        self._setup_linetypes()
        self._setup_layers()
        self._setup_text_styles()
        self._setup_dimstyle()

        self.doc.header["$INSUNITS"] = DXF_UNITS.get(unit, 2)
        self.doc.header["$LTSCALE"] = 1.0
        self.doc.header["$DIMSCALE"] = 1.0

    # ── Setup ───────────────────────────────────────────────────────────

    def _setup_linetypes(self):
        for lt in CUSTOM_LINETYPES:
            if lt["name"] not in self.doc.linetypes:
                self.doc.linetypes.add(
                    lt["name"],
                    pattern=lt["pattern"],
                    description=lt["description"],
                )

    def _setup_layers(self):
        for layer_def in LAYERS:
            if layer_def.name in self.doc.layers:
                continue

            layer = self.doc.layers.add(
                layer_def.name,
                color=layer_def.color,
                linetype=layer_def.linetype,
            )
            layer.dxf.lineweight = layer_def.lineweight

            if not layer_def.plot:
                layer.dxf.plot = 0

            if layer_def.frozen:
                layer.freeze()

    def _setup_text_styles(self):
        for ts in TEXT_STYLES:
            if ts["name"] not in self.doc.styles:
                self.doc.styles.add(ts["name"], font=ts["font"])

    def _setup_dimstyle(self):
        """Dimension style sized for a deck drawn in feet."""
        if "DECK_DIM" in self.doc.dimstyles:
            return

        style = self.doc.dimstyles.new("DECK_DIM")
        style.dxf.dimtxt = 0.5       # text height (ft)
        style.dxf.dimasz = 0.4       # arrow size
        style.dxf.dimexo = 0.25      # extension line offset from origin
        style.dxf.dimexe = 0.4       # extension line extension past dim line
        style.dxf.dimclrd = 3
        style.dxf.dimclre = 3
        style.dxf.dimclrt = 3
        style.dxf.dimdec = 2         # hundredths of a foot
        style.dxf.dimtad = 1         # text above dimension line
        style.dxf.dimgap = 0.2

    # ── Deck geometry ───────────────────────────────────────────────────

    def add_outline(self, points: Sequence[Sequence[float]]):
        """Sketch outline; open polyline for 2-point paths."""
        if len(points) < 2:
            return
        self.msp.add_lwpolyline(
            [tuple(p) for p in points],
            close=len(points) >= 3,
            dxfattribs={"layer": "L-DECK-OUTL"},
        )

    def add_board(self, strip: Polygon):
        if strip.is_empty:
            return
        self.msp.add_lwpolyline(
            list(strip.exterior.coords),
            close=True,
            dxfattribs={"layer": "L-DECK-BORD"},
        )

    def add_joist(self, line: LineString):
        coords = list(line.coords)
        self.msp.add_line(coords[0], coords[-1], dxfattribs={"layer": "L-DECK-JOIS"})

    def add_grid(self, bounds: tuple[float, float, float, float], step_ft: float):
        """Snap grid covering ``bounds`` (minx, miny, maxx, maxy), from the origin."""
        if step_ft <= 0:
            return
        min_x, min_y, max_x, max_y = bounds
        x = min_x
        while x <= max_x + 1e-9:
            self.msp.add_line((x, min_y), (x, max_y), dxfattribs={"layer": "A-GRID"})
            x += step_ft
        y = min_y
        while y <= max_y + 1e-9:
            self.msp.add_line((min_x, y), (max_x, y), dxfattribs={"layer": "A-GRID"})
            y += step_ft

    # ── Annotations ────────────────────────────────────────────────────

    def add_dimension(self, start: tuple, end: tuple, offset: float = 1.0):
        """Linear dimension; horizontal or vertical by the dominant axis."""
        dx = end[0] - start[0]
        dy = end[1] - start[1]

        if abs(dx) >= abs(dy):
            base = (start[0], start[1] + offset)
            angle = 0
        else:
            base = (start[0] + offset, start[1])
            angle = 90

        dim = self.msp.add_linear_dim(
            base=base,
            p1=start,
            p2=end,
            angle=angle,
            dimstyle="DECK_DIM",
            dxfattribs={"layer": "A-ANNO-DIMS"},
        )
        dim.render()

    def add_takeoff_note(
        self,
        position: tuple,
        params: TakeoffParameters,
        result: TakeoffResult,
    ):
        lines = [
            f"Board {format_inches_fraction(params.board_width_in)} "
            f"gap {format_inches_fraction(params.gap_in)} "
            f"joists {format_inches_fraction(params.joist_spacing_in)} o.c.",
            f"Board rows: {result.board_rows}",
            f"Joists: {result.joist_count}",
            f"Clips (no waste): {result.clips_no_waste}",
            f"Clips (x{params.waste_factor}): {result.clips_with_waste}",
            f"Board run: {format_feet(result.board_run_ft)}",
            f"Area: {result.area_sq_ft:.1f} sq ft",
        ]
        self.msp.add_mtext(
            "\\P".join(lines),
            dxfattribs={
                "layer": "A-ANNO-NOTE",
                "style": "DECK_NOTE",
                "char_height": 0.4,
                "width": 12,
            },
        ).set_location(insert=position)

    # ── Output ─────────────────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        """Serialize DXF to bytes for HTTP response streaming."""
        stream = io.StringIO()
        self.doc.write(stream)
        stream.seek(0)
        return stream.read().encode("utf-8")


def write_deck(
    exporter: DXFExporter,
    points: Sequence[Sequence[float]],
    params: TakeoffParameters,
    result: TakeoffResult,
    layout: DeckLayout,
    grid_ft: float | None = None,
) -> None:
    """Write the full deck drawing into ``exporter``."""
    min_x, min_y, max_x, max_y = layout.outline.bounds

    if grid_ft:
        exporter.add_grid((min(min_x, 0.0), min(min_y, 0.0), max_x, max_y), grid_ft)

    if len(points) >= 2:
        exporter.add_outline(points)
    else:
        exporter.add_outline(list(layout.outline.exterior.coords)[:-1])

    for strip in layout.boards:
        exporter.add_board(strip)
    for joist in layout.joists:
        exporter.add_joist(joist)

    if max_x > min_x:
        exporter.add_dimension((min_x, min_y), (max_x, min_y), offset=-1.5)
    if max_y > min_y:
        exporter.add_dimension((max_x, min_y), (max_x, max_y), offset=1.5)

    exporter.add_takeoff_note((max_x + 3.0, max_y), params, result)
