"""Deck Fastener Takeoff — FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deckcalc.config import settings
from deckcalc.api.routes_takeoff import router as takeoff_router
from deckcalc.api.routes_sketch import router as sketch_router
from deckcalc.api.routes_export import router as export_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Sketch a deck outline on a snapping grid and take off boards, joists and clips.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(takeoff_router, prefix="/api")
app.include_router(sketch_router, prefix="/api")
app.include_router(export_router, prefix="/api")


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
