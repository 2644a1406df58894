"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at the /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# HTTP metrics
http_requests = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'route', 'status']
)

http_latency = Histogram(
    'http_request_latency_seconds',
    'HTTP request latency',
    ['method', 'route'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)

# Database metrics
db_writes = Counter(
    'db_writes_total',
    'Committed write operations',
    ['resource', 'operation']  # create, update, delete
)

db_rollbacks = Counter(
    'db_rollbacks_total',
    'Transactions rolled back after a failed write',
    ['resource']
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_request(method: str, route: str, status_code: int, duration_s: float):
    http_requests.labels(method=method, route=route, status=str(status_code)).inc()
    http_latency.labels(method=method, route=route).observe(duration_s)


def record_write(resource: str, operation: str):
    """Record a committed write. Operation: create, update, delete"""
    db_writes.labels(resource=resource, operation=operation).inc()


def record_rollback(resource: str):
    db_rollbacks.labels(resource=resource).inc()
