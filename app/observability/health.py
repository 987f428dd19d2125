"""Health checks for the backend server.

The only dependency worth checking is the database connector. The HTTP
layer serves the root route in every connector state, so readiness is an
operator signal, not a gate on request handling.

Usage:
    from app.observability.health import check_health, check_readiness

    status = check_health(connector)
    print(status.is_healthy)

    if not check_readiness(connector):
        ...  # report 503 from a readiness probe
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.database import ConnectionState, DatabaseConnector, redact_uri
from app.observability.logging import get_logger
from app.observability.metrics import set_gauge

logger = get_logger(__name__)


@dataclass
class ComponentHealth:
    """Health status of a single component.

    Attributes:
        name: Component name
        status: Health status ("healthy" or "unhealthy")
        message: Human-readable status message
        latency_ms: Health check latency in milliseconds
        metadata: Additional component-specific metadata
    """

    name: str
    status: str  # "healthy" or "unhealthy"
    message: str
    latency_ms: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_healthy(self) -> bool:
        """Check if component is healthy."""
        return self.status == "healthy"


@dataclass
class HealthStatus:
    """Overall system health status."""

    status: str
    components: List[ComponentHealth]
    timestamp: str
    uptime_seconds: Optional[float] = None

    @property
    def is_healthy(self) -> bool:
        """Check if overall system is healthy."""
        return self.status == "healthy"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status,
            "timestamp": self.timestamp,
            "uptime_seconds": self.uptime_seconds,
            "components": [
                {
                    "name": c.name,
                    "status": c.status,
                    "message": c.message,
                    "latency_ms": c.latency_ms,
                    "metadata": c.metadata,
                }
                for c in self.components
            ],
        }


_STATE_MESSAGES = {
    ConnectionState.NOT_CONNECTED: "Database connect not started",
    ConnectionState.CONNECTING: "Database connect in progress",
    ConnectionState.CONNECTED: "Database connected",
    ConnectionState.FAILED: "Database connect failed",
}


def check_database_health(connector: DatabaseConnector) -> ComponentHealth:
    """Report the connector state as a component health entry.

    Does not open a new connection; the connector's single attempt is the
    source of truth.
    """
    start_time = time.time()

    metadata: Dict[str, Any] = {
        "uri": redact_uri(connector.uri),
        "state": connector.state.value,
    }
    message = _STATE_MESSAGES[connector.state]
    if connector.error is not None:
        metadata["error"] = str(connector.error)
        message = f"{message}: {connector.error}"

    return ComponentHealth(
        name="database",
        status="healthy" if connector.is_connected else "unhealthy",
        message=message,
        latency_ms=(time.time() - start_time) * 1000,
        metadata=metadata,
    )


def check_health(
    connector: DatabaseConnector, uptime_seconds: Optional[float] = None
) -> HealthStatus:
    """Check overall system health.

    Args:
        connector: Database connector owned by the application
        uptime_seconds: Seconds since startup, if tracked by the caller

    Returns:
        HealthStatus with overall and component-level health
    """
    components = [check_database_health(connector)]

    all_healthy = all(c.is_healthy for c in components)
    overall_status = "healthy" if all_healthy else "unhealthy"

    for component in components:
        metric_value = 1.0 if component.is_healthy else 0.0
        set_gauge("health_status", metric_value, labels={"component": component.name})

    logger.debug(
        "health_check_completed",
        status=overall_status,
        components_count=len(components),
        healthy_count=sum(1 for c in components if c.is_healthy),
    )

    return HealthStatus(
        status=overall_status,
        components=components,
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime_seconds=uptime_seconds,
    )


def check_readiness(connector: DatabaseConnector) -> bool:
    """Readiness probe: True once the database connection is established."""
    health = check_health(connector)
    for component in health.components:
        if not component.is_healthy:
            logger.warning(
                "readiness_check_failed",
                component=component.name,
                message=component.message,
            )
            return False
    return True


def check_liveness() -> bool:
    """Liveness probe: the event loop answered, so the process is alive."""
    return True


__all__ = [
    "ComponentHealth",
    "HealthStatus",
    "check_database_health",
    "check_health",
    "check_liveness",
    "check_readiness",
]
