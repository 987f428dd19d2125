"""
Entrypoint for the backend server.

Usage:
    # Console script / module
    backend-server
    python -m app.server.main

    # Uvicorn application factory
    uvicorn app.server.main:bootstrap --factory --host 0.0.0.0 --port 8000

A failure to bind the port is not handled here: Uvicorn reports it and the
process exits non-zero without ever logging `server_started`.
"""

from __future__ import annotations

import sys
from typing import List, Optional

import uvicorn
from fastapi import FastAPI

from app.config import Settings, load_config
from app.exceptions import ConfigError
from app.observability.logging import configure_logging, get_logger
from app.server import create_app

logger = get_logger(__name__)

# Exit status Uvicorn uses when startup fails
STARTUP_FAILURE = 3


class ListeningServer(uvicorn.Server):
    """Uvicorn server that logs `server_started` once the socket is bound."""

    async def startup(self, sockets: Optional[List] = None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("server_started", host=self.config.host, port=self.config.port)


def bootstrap(settings: Optional[Settings] = None) -> FastAPI:
    """
    Return a configured application instance.

    Downstream runners (Uvicorn, Gunicorn workers, tests) call this to
    obtain the app without importing a module-level global.
    """

    return create_app(settings or load_config())


def main() -> int:
    """Load settings, configure logging and serve until interrupted."""

    # Errors raised while loading settings still go to stderr
    configure_logging(cache_logger_on_first_use=False)

    try:
        settings = load_config()
    except ConfigError as exc:
        logger.error("config_load_failed", error=str(exc))
        return 2

    configure_logging(
        level=settings.log_level,
        format=settings.log_format,
        log_file=settings.log_file,
    )

    server = ListeningServer(
        uvicorn.Config(
            bootstrap(settings),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    )
    server.run()
    return 0 if server.started else STARTUP_FAILURE


if __name__ == "__main__":
    sys.exit(main())
