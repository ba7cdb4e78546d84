"""
Telemetry utilities for the code review gateway.
"""

from .metrics import (
    error_counter,
    get_metric,
    latency_histogram,
    request_counter,
    upstream_duration_histogram,
)
from .tracing import instrument_fastapi_app, setup_tracing, upstream_span


__all__ = [
    "error_counter",
    "get_metric",
    "instrument_fastapi_app",
    "latency_histogram",
    "request_counter",
    "setup_tracing",
    "upstream_duration_histogram",
    "upstream_span",
]
