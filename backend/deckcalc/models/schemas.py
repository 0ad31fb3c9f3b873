"""Pydantic schemas for API request/response validation."""

from __future__ import annotations

import math

from pydantic import BaseModel, field_validator

from deckcalc.config import settings
from deckcalc.core.takeoff.calculator import TakeoffParameters


def _finite(v: float) -> float:
    if not math.isfinite(v):
        raise ValueError("Value must be a finite number")
    return v


class Coordinate(BaseModel):
    x: float
    y: float

    @field_validator("x", "y")
    @classmethod
    def must_be_finite(cls, v: float) -> float:
        return _finite(v)


class ParametersInput(BaseModel):
    board_width_in: float = settings.board_width_in
    gap_in: float = settings.gap_in
    joist_spacing_in: float = settings.joist_spacing_in
    joists_rotated: bool = False
    waste_factor: float = settings.waste_factor

    @field_validator("board_width_in", "gap_in", "joist_spacing_in", "waste_factor")
    @classmethod
    def must_be_finite(cls, v: float) -> float:
        return _finite(v)

    def to_parameters(self) -> TakeoffParameters:
        return TakeoffParameters(**self.model_dump())


class OutlineRequest(BaseModel):
    points: list[list[float]]  # [[x, y], ...] in feet
    params: ParametersInput = ParametersInput()
    grid_inches: int = settings.default_grid_inches

    @field_validator("points")
    @classmethod
    def must_be_pairs(cls, v: list[list[float]]) -> list[list[float]]:
        for p in v:
            if len(p) != 2:
                raise ValueError("Coordinate must be [x, y]")
            _finite(p[0])
            _finite(p[1])
        return v


class TakeoffResponse(BaseModel):
    takeoff: dict
    sketch: dict
    issues: list[dict] = []


class LayoutResponse(BaseModel):
    outline: list[list[float]]
    boards_along_width: bool
    boards: list[dict]
    joists: list[dict]


# ── Sketch session ──────────────────────────────────────────────────────

class GridRequest(BaseModel):
    inches: int


class EdgeLengthRequest(BaseModel):
    length_ft: float | None = None


class EdgeEditOpenRequest(BaseModel):
    anchor: Coordinate = Coordinate(x=0.0, y=0.0)


class EdgeEditValueRequest(BaseModel):
    value: float | str | None = None


class DragStartRequest(BaseModel):
    index: int
