"""Observability for the backend server.

Components:
    - logging: Structured logging with structlog
    - metrics: Prometheus metrics export
    - health: Health checks over the database connector

Usage:
    from app.observability import get_logger

    logger = get_logger(__name__)
    logger.info("server_started", port=8000)
"""

from app.observability.logging import configure_logging, get_logger
from app.observability.metrics import (
    get_metrics_registry,
    increment_counter,
    set_gauge,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_metrics_registry",
    "increment_counter",
    "set_gauge",
]
