"""Sketch session endpoints — desktop single-session.

One PolygonEditor lives per process. Pointer coordinates arrive in canvas
pixels; the editor's viewport is refitted to the outline before each pointer
operation so pixels map to feet exactly as the client drew them.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from deckcalc.config import settings
from deckcalc.core.editor.grid import GridResolution
from deckcalc.core.editor.polygon_editor import PolygonEditor, default_outline
from deckcalc.models.deck_model import build_takeoff_response
from deckcalc.models.schemas import (
    Coordinate,
    DragStartRequest,
    EdgeEditOpenRequest,
    EdgeEditValueRequest,
    EdgeLengthRequest,
    GridRequest,
    ParametersInput,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sketch"])


def _new_editor() -> PolygonEditor:
    return PolygonEditor(
        points=default_outline(settings.default_deck_width_ft, settings.default_deck_height_ft),
        grid=GridResolution.from_inches(settings.default_grid_inches),
    )


# Desktop-only: one editor and one parameter set per process.
_editor = _new_editor()
_params = ParametersInput().to_parameters()


def _fit() -> None:
    _editor.fit_to_canvas(settings.canvas_width, settings.canvas_height, settings.canvas_pad)


def _state(changed: bool | None = None) -> dict:
    _fit()
    state = _editor.to_dict()
    state["viewport"] = _editor.viewport.to_dict()
    if changed is not None:
        state["changed"] = changed
    return state


def reset_session() -> None:
    """Restore the default rectangle, grid, and parameters."""
    global _editor, _params
    _editor = _new_editor()
    _params = ParametersInput().to_parameters()


# ── State ───────────────────────────────────────────────────────────────

@router.get("/sketch")
async def sketch_state():
    return _state()


@router.post("/sketch/reset")
async def sketch_reset():
    reset_session()
    return _state()


@router.post("/sketch/clear")
async def sketch_clear():
    _editor.clear()
    return _state(changed=True)


@router.put("/sketch/grid")
async def sketch_grid(req: GridRequest):
    try:
        _editor.set_grid_resolution(req.inches)
    except ValueError as exc:
        raise HTTPException(422, detail=str(exc))
    return _state()


# ── Pointer operations (pixels) ─────────────────────────────────────────

@router.post("/sketch/click")
async def sketch_click(pt: Coordinate):
    _fit()
    return _state(changed=_editor.add_vertex((pt.x, pt.y)))


@router.post("/sketch/drag/start")
async def sketch_drag_start(req: DragStartRequest):
    return _state(changed=_editor.begin_drag(req.index))


@router.post("/sketch/drag/move")
async def sketch_drag_move(pt: Coordinate):
    _fit()
    return _state(changed=_editor.update_drag((pt.x, pt.y)))


@router.post("/sketch/drag/end")
async def sketch_drag_end():
    _editor.end_drag()
    return _state()


@router.post("/sketch/delete-near")
async def sketch_delete_near(pt: Coordinate):
    _fit()
    return _state(changed=_editor.delete_near((pt.x, pt.y)))


# ── Edge operations ─────────────────────────────────────────────────────

@router.post("/sketch/edges/{index}/midpoint")
async def sketch_insert_midpoint(index: int):
    return _state(changed=_editor.insert_midpoint(index))


@router.put("/sketch/edges/{index}/length")
async def sketch_edge_length(index: int, req: EdgeLengthRequest):
    return _state(changed=_editor.set_edge_length(index, req.length_ft))


@router.post("/sketch/edges/{index}/edit")
async def sketch_edge_edit_open(index: int, req: EdgeEditOpenRequest):
    if not _editor.open_edge_edit(index, (req.anchor.x, req.anchor.y)):
        raise HTTPException(404, detail=f"Edge {index} does not exist")
    return _state()


@router.put("/sketch/edit")
async def sketch_edge_edit_value(req: EdgeEditValueRequest):
    _editor.update_edge_edit(req.value)
    return _state()


@router.post("/sketch/edit/commit")
async def sketch_edge_edit_commit():
    return _state(changed=_editor.commit_edge_edit())


@router.post("/sketch/edit/cancel")
async def sketch_edge_edit_cancel():
    _editor.cancel_edge_edit()
    return _state()


# ── Takeoff ─────────────────────────────────────────────────────────────

@router.get("/sketch/params")
async def sketch_params_get():
    return asdict(_params)


@router.put("/sketch/params")
async def sketch_params(req: ParametersInput):
    global _params
    _params = req.to_parameters()
    logger.info("Takeoff parameters set: %s", _params)
    return asdict(_params)


@router.get("/sketch/takeoff")
async def sketch_takeoff():
    return build_takeoff_response(_editor.points, _params)
