"""Export endpoints — generate DXF files for download."""

import io

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from deckcalc.core.editor.grid import GridResolution
from deckcalc.models.deck_model import export_deck_dxf
from deckcalc.models.schemas import OutlineRequest

router = APIRouter(tags=["export"])


@router.post("/export/dxf")
async def export_dxf(req: OutlineRequest):
    """Render the outline, boards, joists and takeoff note as a DXF download."""
    try:
        grid = GridResolution.from_inches(req.grid_inches)
    except ValueError as exc:
        raise HTTPException(422, detail=str(exc))

    dxf_bytes = export_deck_dxf(req.points, req.params.to_parameters(), grid.inches)
    return StreamingResponse(
        io.BytesIO(dxf_bytes),
        media_type="application/dxf",
        headers={"Content-Disposition": 'attachment; filename="deck.dxf"'},
    )
