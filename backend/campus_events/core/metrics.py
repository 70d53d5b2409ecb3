"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Check-in metrics
checkin_attempts = Counter(
    'checkin_attempts_total',
    'Total check-in attempts',
    ['result']  # success, event_not_found, invalid_token, not_registered, already_checked_in
)

checkin_latency = Histogram(
    'checkin_latency_seconds',
    'Check-in verification latency',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Registration ledger metrics
registration_attempts = Counter(
    'event_registration_attempts_total',
    'Total event registration attempts',
    ['result']  # success, already_registered
)

# Activity log metrics
activity_writes = Counter(
    'activity_writes_total',
    'Activity log writes per sink',
    ['sink', 'result']  # ok, failed
)

redis_connection_errors = Counter(
    'redis_connection_errors_total',
    'Redis connection errors'
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_checkin(result: str):
    """Record a check-in outcome."""
    checkin_attempts.labels(result=result).inc()


def record_registration(result: str):
    registration_attempts.labels(result=result).inc()


def record_activity_write(sink: str, ok: bool):
    activity_writes.labels(sink=sink, result="ok" if ok else "failed").inc()
