"""Per-application runtime context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request

from app.config import Settings
from app.database import DatabaseConnector


@dataclass
class AppContext:
    """
    Everything one application instance owns.

    Stored on `app.state.context` so handlers and the lifespan reach the
    settings and the database connector without module-level globals.
    """

    settings: Settings
    connector: DatabaseConnector
    started_at: Optional[datetime] = None

    def mark_started(self) -> None:
        self.started_at = datetime.now(timezone.utc)

    def uptime_seconds(self) -> Optional[float]:
        if self.started_at is None:
            return None
        return (datetime.now(timezone.utc) - self.started_at).total_seconds()


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context of the serving application."""
    return request.app.state.context


__all__ = ["AppContext", "get_context"]
