"""Stateless takeoff endpoints — compute counts and layout for a posted outline."""

from fastapi import APIRouter

from deckcalc.models.schemas import OutlineRequest, TakeoffResponse, LayoutResponse
from deckcalc.models.deck_model import build_takeoff_response, build_deck_layout

router = APIRouter(tags=["takeoff"])


@router.post("/takeoff", response_model=TakeoffResponse)
async def takeoff(req: OutlineRequest):
    """Board rows, joists and clip counts for an outline in feet."""
    return build_takeoff_response(req.points, req.params.to_parameters())


@router.post("/layout", response_model=LayoutResponse)
async def layout(req: OutlineRequest):
    """Board strips and joist lines clipped to the outline."""
    return build_deck_layout(req.points, req.params.to_parameters()).to_dict()
