"""Observability module for logging and metrics."""

from request_layer.observability.logging import configure_logging
from request_layer.observability.metrics import RequestMetrics


__all__ = [
    "RequestMetrics",
    "configure_logging",
]
