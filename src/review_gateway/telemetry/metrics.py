"""
Prometheus metrics for the code review gateway.

All metrics are exposed via the /metrics endpoint.
"""

from collections.abc import Sequence
from typing import Any, TypeVar, cast

from prometheus_client import REGISTRY, Counter, Gauge, Histogram

MetricType = Counter | Gauge | Histogram
T = TypeVar("T", bound=MetricType)


def get_metric(
    name: str,
    type_cls: type[T],
    documentation: str,
    labelnames: Sequence[str],
    buckets: Sequence[float] | None = None,
) -> T:
    """
    Get an existing metric or create a new one.
    This prevents 'Duplicated timeseries' errors when reloading modules or running tests.
    """
    if name in REGISTRY._names_to_collectors:
        return cast("T", REGISTRY._names_to_collectors[name])

    kwargs = {}
    if buckets and type_cls is Histogram:
        kwargs["buckets"] = buckets
    return cast("T", type_cls(name, documentation, labelnames, **cast("Any", kwargs)))


# === Request Metrics ===

request_counter = get_metric(
    "gateway_requests_total",
    Counter,
    "Total number of requests handled by the gateway",
    ["route", "status"],  # status=success/client_error/error/degraded
)

latency_histogram = get_metric(
    "gateway_request_latency_seconds",
    Histogram,
    "End-to-end request latency distribution",
    ["route"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

# === Upstream Metrics ===

upstream_duration_histogram = get_metric(
    "gateway_upstream_duration_seconds",
    Histogram,
    "Duration of calls to external services",
    ["service"],  # service=supabase/gemini
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

# === Error Metrics ===

error_counter = get_metric(
    "gateway_errors_total",
    Counter,
    "Total number of errors by route and type",
    ["route", "error_type"],  # error_type=validation/upstream/query_rejected
)
