"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_engine.config import GameConfig
from snake_engine.server.routes import router
from snake_engine.server.session_manager import SessionManager
from snake_engine.server.storage import HighScoreStore
from snake_engine.server.websocket import ws_router


def build_manager(config: GameConfig | None = None) -> SessionManager:
    """Create a session manager, with score persistence if configured."""
    config = config if config is not None else GameConfig()
    store = (
        HighScoreStore(config.scores_path, limit=config.max_scores)
        if config.scores_path else None
    )
    return SessionManager(config, store=store)


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session_manager = build_manager(config)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Snake Engine API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
