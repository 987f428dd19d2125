"""Prometheus-compatible metrics for the backend server.

Tracks the outcome of the database connect attempt so operators can see
whether a running server actually reached its database.

Usage:
    from app.observability.metrics import increment_counter, set_gauge

    increment_counter("database_connect_attempts_total", labels={"outcome": "failed"})
    set_gauge("database_connected", 1)
"""

from typing import Any, Dict, Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

METRIC_PREFIX = "backend_"

# Global registry for metrics
_registry = CollectorRegistry()

database_connect_attempts_total = Counter(
    "backend_database_connect_attempts_total",
    "Database connect attempts by outcome",
    ["outcome"],  # outcome: connected, failed
    registry=_registry,
)

database_connected = Gauge(
    "backend_database_connected",
    "Whether the database connection is established (1=connected, 0=not)",
    registry=_registry,
)

health_status = Gauge(
    "backend_health_status",
    "Health status of components (1=healthy, 0=unhealthy)",
    ["component"],
    registry=_registry,
)


def increment_counter(
    metric_name: str,
    value: float = 1.0,
    labels: Optional[Dict[str, str]] = None,
) -> None:
    """Increment a counter metric.

    Args:
        metric_name: Name of the counter (with or without backend_ prefix)
        value: Amount to increment by (default: 1.0)
        labels: Optional labels as key-value pairs
    """
    labels = labels or {}
    metric = _get_metric(metric_name)
    if metric and isinstance(metric, Counter):
        if labels:
            metric.labels(**labels).inc(value)
        else:
            metric.inc(value)


def set_gauge(
    metric_name: str,
    value: float,
    labels: Optional[Dict[str, str]] = None,
) -> None:
    """Set a gauge metric value.

    Args:
        metric_name: Name of the gauge (with or without backend_ prefix)
        value: Value to set
        labels: Optional labels as key-value pairs
    """
    labels = labels or {}
    metric = _get_metric(metric_name)
    if metric and isinstance(metric, Gauge):
        if labels:
            metric.labels(**labels).set(value)
        else:
            metric.set(value)


def get_metrics_registry() -> CollectorRegistry:
    """Get the global metrics registry."""
    return _registry


def get_metrics_output() -> bytes:
    """Get Prometheus-formatted metrics output."""
    return generate_latest(_registry)


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST


def _get_metric(metric_name: str) -> Any:
    """Look up a metric object by name, tolerating the backend_ prefix."""
    if metric_name.startswith(METRIC_PREFIX):
        metric_name = metric_name[len(METRIC_PREFIX):]
    return globals().get(metric_name)


__all__ = [
    "increment_counter",
    "set_gauge",
    "get_metrics_registry",
    "get_metrics_output",
    "get_metrics_content_type",
    "database_connect_attempts_total",
    "database_connected",
    "health_status",
]
