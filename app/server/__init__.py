"""
HTTP application factory for the backend server.

`create_app()` wires one self-contained application:

* a permissive cross-origin policy,
* the root route (`GET /` -> "Hello from server"),
* optionally the health and metrics routes,
* a lifespan that starts the database connector in the background and
  closes it on shutdown.

The listener does not wait for the database unless `require_database` is
set; requests are served whether or not the connect attempt succeeds.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.config import Settings, load_config
from app.database import ConnectionState, DatabaseConnector, redact_uri
from app.exceptions import DatabaseUnavailableError
from app.observability.logging import get_logger
from app.server.api import router as root_router
from app.server.api.health import router as health_router
from app.server.context import AppContext, get_context

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start the background connect, serve, then release the client."""
    context: AppContext = app.state.context
    settings = context.settings
    connector = context.connector

    task = connector.start()
    if settings.require_database:
        state = await task
        if state is not ConnectionState.CONNECTED:
            await connector.close()
            raise DatabaseUnavailableError(
                "Database required at startup but the connect attempt failed",
                uri=redact_uri(connector.uri),
                cause=connector.error,
            )

    context.mark_started()
    try:
        yield
    finally:
        await connector.close()
        logger.info("server_stopped")


def create_app(
    settings: Optional[Settings] = None,
    connector: Optional[DatabaseConnector] = None,
) -> FastAPI:
    """
    Build a new application with its own context.

    Args:
        settings: Resolved settings; loaded from environment/file when None
        connector: Database connector; built from settings when None

    Returns:
        FastAPI application ready to be served by Uvicorn
    """
    settings = settings or load_config()
    connector = connector or DatabaseConnector(
        settings.database_uri, timeout_ms=settings.db_timeout_ms
    )

    app = FastAPI(
        title="Backend Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.context = AppContext(settings=settings, connector=connector)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(root_router)
    if settings.health_checks_enabled:
        app.include_router(health_router)

    return app


__all__ = ["AppContext", "create_app", "get_context", "lifespan"]
