"""
Prometheus metrics for the proxy.
Docs: Prometheus client (0.22.x).
"""

from fastapi import FastAPI
from starlette.responses import Response
from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# Tiny FastAPI app ONLY for /metrics; the main app mounts it at /metrics.
metrics_app = FastAPI()

@metrics_app.get("/")  # must be "/" so mounting at "/metrics" works
def metrics_root():
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", labelnames=("endpoint", "method")
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Request latency", labelnames=("endpoint", "method")
)
# outcome: ok | placeholder | error
PROVIDER_CALLS = Counter(
    "provider_calls_total", "Outbound provider calls", labelnames=("provider", "outcome")
)
