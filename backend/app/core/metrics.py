"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_operations = Counter(
    'booking_operations_total',
    'Booking write operations',
    ['operation', 'outcome']  # create/update/delete; success/conflict/not_found/updated/unchanged
)

bookings_cleared = Counter(
    'bookings_cleared_total',
    'Future bookings removed by lifecycle cascades',
    ['scope']  # resource, institution
)

pending_query_latency = Histogram(
    'pending_bookings_query_seconds',
    'Latency of pending-booking lookups including the sort',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Cascade metrics
cascade_steps = Counter(
    'cascade_steps_total',
    'Lifecycle cascade steps executed',
    ['workflow', 'step', 'status']  # status: ok, failed
)

# Error report metrics
error_reports_resolved = Counter(
    'error_reports_resolved_total',
    'Error reports bulk-resolved on a resource'
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)

redis_connection_errors = Counter(
    'redis_connection_errors_total',
    'Redis connection errors'
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_operation(operation: str, outcome: str):
    """Record booking write. Outcome: success, conflict, not_found, updated, unchanged"""
    booking_operations.labels(operation=operation, outcome=outcome).inc()


def record_cascade_step(workflow: str, step: str, ok: bool):
    status = "ok" if ok else "failed"
    cascade_steps.labels(workflow=workflow, step=step, status=status).inc()


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
