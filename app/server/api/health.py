"""Health check and metrics endpoints.

Mounted only when `health_checks_enabled` is set:
- GET /health            component-level status (503 when unhealthy)
- GET /health/liveness   200 while the process answers
- GET /health/readiness  503 until the database connection is established
- GET /metrics           Prometheus exposition format
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from app.observability.health import check_health, check_liveness, check_readiness
from app.observability.logging import get_logger
from app.observability.metrics import get_metrics_content_type, get_metrics_output
from app.server.context import AppContext, get_context

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", response_class=JSONResponse)
async def health(context: AppContext = Depends(get_context)) -> JSONResponse:
    """Comprehensive health check.

    Response Codes:
        200: All components healthy
        503: One or more components unhealthy
    """
    health_status = check_health(
        context.connector, uptime_seconds=context.uptime_seconds()
    )
    status_code = 200 if health_status.is_healthy else 503
    return JSONResponse(content=health_status.to_dict(), status_code=status_code)


@router.get("/health/liveness", response_class=JSONResponse)
async def liveness() -> JSONResponse:
    """Liveness probe."""
    is_alive = check_liveness()
    return JSONResponse(
        content={
            "status": "alive" if is_alive else "dead",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        status_code=200 if is_alive else 503,
    )


@router.get("/health/readiness", response_class=JSONResponse)
async def readiness(context: AppContext = Depends(get_context)) -> JSONResponse:
    """Readiness probe.

    Response Codes:
        200: Database connected
        503: Database connect pending or failed
    """
    is_ready = check_readiness(context.connector)
    body: Dict[str, Any] = {
        "status": "ready" if is_ready else "not_ready",
        "database": context.connector.state.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    return JSONResponse(content=body, status_code=200 if is_ready else 503)


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=get_metrics_output(),
        media_type=get_metrics_content_type(),
    )


__all__ = ["router"]
