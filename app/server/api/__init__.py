"""
HTTP routes for the backend server.

`router` carries the public surface: the single root route. The optional
health and metrics routes live in `app.server.api.health` and are only
mounted when health checks are enabled.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

ROOT_MESSAGE = "Hello from server"

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Return the fixed greeting."""
    return ROOT_MESSAGE


__all__ = ["ROOT_MESSAGE", "router"]
