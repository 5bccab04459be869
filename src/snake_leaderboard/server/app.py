"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_leaderboard.config import Settings
from snake_leaderboard.server.routes import router
from snake_leaderboard.server.store import PostgresScoreStore, ScoreStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    owned: ScoreStore | None = None
    if getattr(app.state, "store", None) is None:
        settings: Settings = app.state.settings
        store = PostgresScoreStore.connect(
            settings.require_database_url(),
            min_connections=settings.pool_min,
            max_connections=settings.pool_max,
        )
        store.create_schema()
        app.state.store = owned = store
    yield
    if owned is not None:
        owned.close()
        app.state.store = None


def create_app(
    store: ScoreStore | None = None, settings: Settings | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    When *store* is omitted, a PostgreSQL store is opened at startup from
    *settings* (or the environment) and closed at shutdown.
    """
    settings = settings if settings is not None else Settings.from_env()
    if store is None:
        # Fail before serving anything when the store cannot be configured.
        settings.require_database_url()
    app = FastAPI(
        title="Snake Leaderboard API", version="0.1.0", lifespan=_lifespan,
    )
    app.state.settings = settings
    app.state.leaderboard_limit = settings.leaderboard_limit
    app.state.store = store
    app.include_router(router)
    return app
