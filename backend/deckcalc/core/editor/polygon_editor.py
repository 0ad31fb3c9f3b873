"""Grid-snapped polygon editing — the state machine behind the sketcher.

The editor owns the vertex sequence, the active grid resolution and the
current :class:`EditSession`. Pointer input arrives in canvas pixels and is
converted to feet through ``viewport``; everything else is done in feet
with the pure functions from :mod:`deckcalc.core.geometry.kernel`.

Operations never raise on bad input. Out-of-range indices, malformed
lengths and clicks that must be swallowed are logged and ignored; the
mutating operations return True only when the vertex sequence changed.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from deckcalc.core.editor.grid import DEFAULT_GRID, GridResolution
from deckcalc.core.editor.session import EdgeLengthEdit, EditSession
from deckcalc.core.geometry.kernel import (
    Point,
    PolygonMetrics,
    adjust_segment_endpoint,
    distance,
    edge_count,
    midpoint,
    polygon_area_and_perimeter,
    snap_to_grid,
)
from deckcalc.core.geometry.viewport import Viewport, fit_viewport
from deckcalc.utils.units import round_to

logger = logging.getLogger(__name__)


def default_outline(width: float = 20.0, height: float = 13.0) -> list[Point]:
    """Starting rectangle shown when a session opens."""
    return [Point(0, 0), Point(width, 0), Point(width, height), Point(0, height)]


class PolygonEditor:
    """Mutable sketch state; every edit snaps to the active grid."""

    def __init__(
        self,
        points: Sequence[Sequence[float]] | None = None,
        grid: GridResolution = DEFAULT_GRID,
        viewport: Viewport | None = None,
    ) -> None:
        self._points: list[Point] = (
            default_outline() if points is None else [Point(*p) for p in points]
        )
        self.grid = grid
        self.viewport = viewport or Viewport()
        self.session = EditSession()

    # ── State ───────────────────────────────────────────────────────────

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(self._points)

    @property
    def metrics(self) -> PolygonMetrics:
        return polygon_area_and_perimeter(self._points)

    @property
    def edge_count(self) -> int:
        return edge_count(self._points)

    def _edge(self, index: int) -> tuple[Point, Point]:
        return self._points[index], self._points[(index + 1) % len(self._points)]

    def _valid_edge(self, index: int) -> bool:
        return 0 <= index < self.edge_count

    def _snap(self, p: Sequence[float]) -> Point:
        return snap_to_grid(p, self.grid.inches)

    def fit_to_canvas(self, width: float, height: float, pad: float = 24.0) -> Viewport:
        """Refit the pixel mapping to the current outline and return it."""
        self.viewport = fit_viewport(self._points, width, height, pad)
        return self.viewport

    def segment_labels(self) -> list[dict]:
        """Length label per defined edge (no closing edge for open paths)."""
        labels = []
        for i in range(self.edge_count):
            a, b = self._edge(i)
            labels.append({
                "index": i,
                "length_ft": round_to(distance(a, b), 2),
                "midpoint": list(midpoint(a, b)),
            })
        return labels

    # ── Vertex operations ───────────────────────────────────────────────

    def add_vertex(self, click: Sequence[float]) -> bool:
        """Append the snapped click position.

        Swallowed once after a drag release, and while an edge-length
        edit is open.
        """
        if self.session.consume_latch():
            logger.debug("Click after drag release ignored")
            return False
        if self.session.editing_edge:
            logger.debug("Click ignored while edge %d is being edited",
                         self.session.edge_edit.edge_index)
            return False
        self._points.append(self._snap(self.viewport.to_feet(click)))
        return True

    def begin_drag(self, index: int) -> bool:
        if not 0 <= index < len(self._points):
            logger.debug("Drag on missing vertex %d ignored", index)
            return False
        self.session.selected = index
        self.session.dragging = True
        return True

    def update_drag(self, raw: Sequence[float]) -> bool:
        """Move the selected vertex to the snapped pointer position."""
        index = self.session.selected
        if not self.session.dragging or index is None:
            return False
        if not 0 <= index < len(self._points):
            logger.debug("Drag target %d no longer exists", index)
            self.session.dragging = False
            self.session.selected = None
            return False
        self._points[index] = self._snap(self.viewport.to_feet(raw))
        return True

    def end_drag(self) -> None:
        """Release the drag; arms the latch so the trailing click is dropped."""
        if self.session.dragging:
            self.session.arm()
        self.session.dragging = False
        self.session.selected = None

    def delete_near(self, cursor: Sequence[float]) -> bool:
        """Remove the vertex nearest the cursor if within half a grid step."""
        if not self._points:
            return False
        target = self.viewport.to_feet(cursor)
        best_index, best_dist = -1, math.inf
        for i, p in enumerate(self._points):
            d = distance(p, target)
            if d < best_dist:
                best_index, best_dist = i, d
        if best_dist > self.grid.feet / 2:
            return False
        del self._points[best_index]
        selected = self.session.selected
        if selected == best_index:
            self.session.dragging = False
            self.session.selected = None
        elif selected is not None and selected > best_index:
            self.session.selected = selected - 1
        return True

    def insert_midpoint(self, edge_index: int) -> bool:
        """Split edge ``edge_index`` at its snapped midpoint."""
        if not self._valid_edge(edge_index):
            logger.debug("Midpoint on undefined edge %d ignored", edge_index)
            return False
        a, b = self._edge(edge_index)
        self._points.insert(edge_index + 1, self._snap(midpoint(a, b)))
        if self.session.selected is not None and self.session.selected > edge_index:
            self.session.selected += 1
        return True

    def set_edge_length(self, edge_index: int, length_ft: object) -> bool:
        """Resize one edge by moving its end vertex along the edge direction.

        Only vertex ``edge_index + 1`` (wrapping) moves; neighbouring edges
        stretch with it. Non-numeric, non-finite or non-positive lengths
        are ignored.
        """
        if len(self._points) < 2:
            return False
        if isinstance(length_ft, bool) or not isinstance(length_ft, (int, float)):
            logger.debug("Edge length %r is not a number", length_ft)
            return False
        if not math.isfinite(length_ft) or length_ft <= 0:
            logger.debug("Edge length %r ignored", length_ft)
            return False
        if not self._valid_edge(edge_index):
            logger.debug("Length on undefined edge %d ignored", edge_index)
            return False
        a, b = self._edge(edge_index)
        end = (edge_index + 1) % len(self._points)
        self._points[end] = self._snap(adjust_segment_endpoint(a, b, float(length_ft)))
        return True

    def clear(self) -> None:
        self._points.clear()
        self.session = EditSession()

    def set_grid_resolution(self, step_inches: float) -> None:
        """Change the snap step for future edits. Existing vertices stay put."""
        self.grid = GridResolution.from_inches(step_inches)

    # ── Edge-length editor ──────────────────────────────────────────────

    def open_edge_edit(self, edge_index: int, anchor: Sequence[float] = (0.0, 0.0)) -> bool:
        """Open the length editor on an edge, pre-filled with its current length."""
        if not self._valid_edge(edge_index):
            return False
        a, b = self._edge(edge_index)
        self.session.edge_edit = EdgeLengthEdit(
            edge_index=edge_index,
            value=round_to(distance(a, b), 2),
            anchor=Point(*anchor),
        )
        return True

    def update_edge_edit(self, value: object) -> None:
        if self.session.edge_edit is not None:
            self.session.edge_edit.value = value

    def commit_edge_edit(self) -> bool:
        """Apply the pending length and close the editor, valid or not."""
        edit = self.session.edge_edit
        if edit is None:
            return False
        self.session.edge_edit = None
        return self.set_edge_length(edit.edge_index, edit.value)

    def cancel_edge_edit(self) -> None:
        self.session.edge_edit = None

    def to_dict(self) -> dict:
        m = self.metrics
        return {
            "points": [list(p) for p in self._points],
            "grid": {
                "inches": self.grid.inches,
                "feet": self.grid.feet,
                "label": self.grid.label,
            },
            "session": self.session.to_dict(),
            "segments": self.segment_labels(),
            "area_sq_ft": round_to(m.area, 2),
            "perimeter_ft": round_to(m.perimeter, 2),
            "vertex_count": len(self._points),
        }
