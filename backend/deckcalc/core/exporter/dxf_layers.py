"""DXF layer, linetype and text style definitions for deck drawings.

Layer names follow the AIA pattern used for site/landscape work:
L-<element>[-<modifier>], with the shared annotation layers kept as A-ANNO-*.

ACI color index reference:
  1=red  2=yellow  3=green  4=cyan  5=blue  6=magenta  7=white
  8=dark grey  9=light grey  250=light grey  251-255=grey scale

Lineweight values are in 100ths of mm:
  13=0.13mm  18=0.18mm  25=0.25mm  35=0.35mm  50=0.50mm  70=0.70mm
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayerDef:
    """Single layer definition with all AutoCAD properties."""
    name: str
    color: int
    linetype: str
    lineweight: int
    description: str
    plot: bool = True          # include when printing
    frozen: bool = False       # start frozen (hidden)


# ── Layer definitions ───────────────────────────────────────────────────

LAYERS: list[LayerDef] = [
    # Deck
    LayerDef("L-DECK-OUTL",   7,   "Continuous",  50, "Deck outline"),
    LayerDef("L-DECK-BORD",   2,   "Continuous",  18, "Deck board strips"),
    LayerDef("L-DECK-JOIS",   8,   "DASHED",      25, "Joists"),

    # Annotations
    LayerDef("A-ANNO-DIMS",   3,   "Continuous",  13, "Dimensions"),
    LayerDef("A-ANNO-NOTE",   2,   "Continuous",  -1, "Takeoff notes"),

    # Reference
    LayerDef("A-GRID",        9,   "Continuous",  13, "Snap grid", plot=False),
]


# ── Linetype definitions ───────────────────────────────────────────────

CUSTOM_LINETYPES: list[dict] = [
    {
        "name": "DASHED",
        "pattern": "A,0.5,-0.25",  # feet
        "description": "Dashed __ __ __ __",
    },
]


# ── Text style definitions ─────────────────────────────────────────────

TEXT_STYLES: list[dict] = [
    {
        "name": "DECK_NOTE",
        "font": "Arial",
    },
    {
        "name": "DECK_DIM",
        "font": "Arial Narrow",
    },
]


# ── DXF unit mapping ───────────────────────────────────────────────────

DXF_UNITS = {
    "in": 1,
    "ft": 2,
}
