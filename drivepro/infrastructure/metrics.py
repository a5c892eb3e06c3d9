from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

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

login_attempts_total = Counter(
    'login_attempts_total',
    'Login attempts by outcome',
    ['outcome']
)

# source is "direct" for staff-created lessons, "booking" for /api/lessons/book
lessons_booked_total = Counter(
    'lessons_booked_total',
    'Lessons created',
    ['source']
)


def metrics_endpoint():
    """Prometheus exposition of the default registry."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
