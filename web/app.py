"""FastAPI application factory for the Dev Journal web interface."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devjournal.storage import MemStorage
from devjournal.turtle import DEFAULT_CANVAS_SIZE, TurtleCanvas

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app(
    storage: MemStorage | None = None,
    canvas_width: int = DEFAULT_CANVAS_SIZE[0],
    canvas_height: int = DEFAULT_CANVAS_SIZE[1],
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        storage: Record store to serve. A fresh empty store when omitted.
        canvas_width: Width of the turtle drawing surface in pixels.
        canvas_height: Height of the turtle drawing surface in pixels.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(
        title="Dev Journal",
        version=VERSION,
        description="Developer knowledge dashboard — journal, bugs, snippets, analytics",
    )

    # Store shared state
    app.state.storage = storage if storage is not None else MemStorage()
    app.state.canvas = TurtleCanvas(canvas_width, canvas_height)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "ok", "version": VERSION}

    # Include route modules
    from web.routes.journal import router as journal_router
    from web.routes.bugs import router as bugs_router
    from web.routes.snippets import router as snippets_router
    from web.routes.analytics import router as analytics_router
    from web.routes.turtle import router as turtle_router

    app.include_router(journal_router, prefix="/api")
    app.include_router(bugs_router, prefix="/api")
    app.include_router(snippets_router, prefix="/api")
    app.include_router(analytics_router, prefix="/api")
    app.include_router(turtle_router, prefix="/api")

    logger.info("Dev Journal app created (canvas %dx%d)", canvas_width, canvas_height)
    return app
