"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from torus_snake import __version__
from torus_snake.server.game_manager import GameManager
from torus_snake.server.routes import router
from torus_snake.server.websocket import ws_router

logger = logging.getLogger(__name__)


def create_app(max_sessions: int = 100) -> FastAPI:
    """Build the API app.

    Each app owns one in-memory :class:`GameManager`, created on startup and
    stopped on shutdown so no tick clock outlives the server.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        manager = GameManager(max_sessions=max_sessions)
        app.state.game_manager = manager
        logger.info("Serving games (at most %d sessions).", max_sessions)
        try:
            yield
        finally:
            await manager.cleanup()

    app = FastAPI(
        title="Torus Snake API",
        description="Wrap-around snake games driven by a server-side tick clock.",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
