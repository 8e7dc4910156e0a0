"""Prometheus metrics collection and HTTP middleware.

HTTP request duration histograms plus the relay counters: inquiry outcomes
and language-model token usage.
"""

from time import monotonic
from typing import NamedTuple

import prometheus_client


class HTTPLabels(NamedTuple):
    method: str
    path: str
    http_status: str


# Maybe kinda optimized. Better than templating a string at least.
_NXX_LUT = ["1XX", "2XX", "3XX", "4XX", "5XX"]


def http_status_nxx(status: int) -> str:
    """A coarser 2XX, 4XX, 5XX"""
    return _NXX_LUT[status // 100 - 1]


BUCKETS = (
    # these are log spaced with 1 sig-fig rounding so there are 3 per decade
    0.0002,  # 200 μs
    0.0005,
    0.001,  # 1 ms
    0.002,
    0.005,
    0.01,
    0.02,
    0.05,
    0.1,
    0.2,
    0.5,
    1,
    2,
    5,
    10,
    20,  # default envoy timeout is 15 seconds, bin up to that time
    float("inf"),
)


def get_path(routes, scope) -> str:
    """Extract the matched route path from a request scope.

    Args:
        routes: List of FastAPI/Starlette route objects
        scope: ASGI request scope dictionary

    Returns:
        The matched route path template, or "path-not-found" if no match
    """
    path = "path-not-found"
    for route in routes:
        _, matches = route.matches(scope)
        if len(matches) > 0:
            path = route.path
    return path


async def prometheus_middleware(request, call_next):
    """HTTP middleware that records request duration metrics.

    Measures the time taken to process each request and records it
    in a Prometheus histogram with method, path, and status labels.

    Args:
        request: The incoming HTTP request
        call_next: The next middleware/handler in the chain

    Returns:
        The HTTP response from the downstream handler
    """
    start_time = monotonic()
    response = await call_next(request)
    elapsed_sec = monotonic() - start_time
    path = get_path(request.app.routes, request.scope)

    labels = HTTPLabels(
        method=request.method,
        path=path,
        http_status=http_status_nxx(response.status_code),
    )
    http_histogram.labels(*labels).observe(elapsed_sec)

    return response


def setup_http_metrics(registry):
    """Create the HTTP request duration histogram.

    Args:
        registry: Prometheus registry to register the metric with

    Returns:
        Histogram for tracking HTTP request durations by method, path, and status
    """
    return prometheus_client.Histogram(
        name="http_request_duration_seconds",
        documentation="Request duration (seconds)",
        labelnames=HTTPLabels._fields,
        registry=registry,
        buckets=BUCKETS,
    )


http_histogram = setup_http_metrics(registry=prometheus_client.REGISTRY)

inquiry_counter = prometheus_client.Counter(
    name="relay_inquiries_total",
    documentation="Inbound inquiries by terminal state",
    labelnames=("outcome",),
    registry=prometheus_client.REGISTRY,
)

llm_token_counter = prometheus_client.Counter(
    name="relay_llm_tokens_total",
    documentation="Language model tokens used for suggestions",
    labelnames=("model", "direction"),
    registry=prometheus_client.REGISTRY,
)


def record_inquiry_outcome(outcome: str) -> None:
    inquiry_counter.labels(outcome=outcome).inc()


def record_llm_tokens(model: str, input_tokens: int, output_tokens: int) -> None:
    """Record token usage of one suggestion request."""
    if input_tokens:
        llm_token_counter.labels(model=model, direction="input").inc(input_tokens)
    if output_tokens:
        llm_token_counter.labels(model=model, direction="output").inc(output_tokens)


def metrics() -> tuple[bytes, str]:
    """Generate Prometheus metrics output for the /metrics endpoint.

    Returns:
        Tuple of (metrics_body, content_type) for the HTTP response
    """
    return (
        prometheus_client.generate_latest(prometheus_client.REGISTRY),
        prometheus_client.CONTENT_TYPE_LATEST,
    )
