from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# HTTP
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# Auth outcomes (register / login / update_password)
auth_events_total = Counter(
    'auth_events_total',
    'Authentication events by outcome',
    ['event', 'outcome']
)

def metrics_endpoint():
    """Prometheus scrape payload"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
