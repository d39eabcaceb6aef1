"""Turtle endpoints — draw a visualization, inspect it, clear it, export PNG."""

from __future__ import annotations

import random

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from devjournal.analytics import dashboard_stats, journey_input, technology_distribution
from devjournal.turtle import journey_stats
from web.dependencies import get_canvas, get_storage
from web.export import export_png
from web.schemas import CanvasOut, DrawRequest, DrawResponse

router = APIRouter(tags=["turtle"])


@router.post("/turtle/draw", response_model=DrawResponse)
async def draw(body: DrawRequest, request: Request):
    """Redraw the canvas in the requested style from the current records.

    A ``seed`` makes the learning-journey wobble reproducible.
    """
    storage = get_storage(request)
    canvas = get_canvas(request)

    journal, bugs, snippets = storage.records()
    stats = dashboard_stats(journal, bugs, snippets, now=storage.clock())
    data = journey_input(stats, technology_distribution(journal, bugs, snippets))

    rng = random.Random(body.seed) if body.seed is not None else None
    canvas.draw_style(body.style, data, complexity=body.complexity, rng=rng)

    return DrawResponse(
        style=body.style.value,
        canvas=CanvasOut(**canvas.to_dict()),
        journey=data.to_dict(),
        stats=journey_stats(data).to_dict(),
    )


@router.get("/turtle", response_model=CanvasOut)
async def get_drawing(request: Request):
    return get_canvas(request).to_dict()


@router.post("/turtle/clear", response_model=CanvasOut)
async def clear_drawing(request: Request):
    canvas = get_canvas(request)
    canvas.clear()
    return canvas.to_dict()


@router.get("/turtle/export")
async def export_drawing(request: Request):
    """Download the current drawing as a PNG snapshot."""
    storage = get_storage(request)
    buf, filename = export_png(get_canvas(request), on=storage.clock().date())
    return StreamingResponse(
        buf,
        media_type="image/png",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
