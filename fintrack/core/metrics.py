"""Prometheus metrics for the finance tracker service.

Metrics are organized into two categories:

Business Metrics (for Product dashboards):
- fintrack_transaction_operations_total: Transaction writes by operation
- fintrack_budget_alerts_total: Budget alerts raised by level
- fintrack_ai_requests_total: AI feature requests by feature and outcome

Technical Metrics (for Engineering/SRE):
- fintrack_ai_request_latency_seconds: End-to-end AI feature latency
- fintrack_ai_provider_latency_seconds: Raw provider call latency
- fintrack_ai_provider_failures_total: Provider failures by error type
- fintrack_ai_provider_retry_total: Provider retries
- fintrack_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

transaction_operations = Counter(
    "fintrack_transaction_operations_total",
    "Total number of transaction writes",
    ["operation"],  # create, update, delete
)

budget_alerts = Counter(
    "fintrack_budget_alerts_total",
    "Total number of budget alerts raised",
    ["level"],  # warning, exceeded
)

ai_requests = Counter(
    "fintrack_ai_requests_total",
    "Total number of AI feature requests",
    ["feature", "outcome"],  # outcome: success, failure, rejected
)


# =============================================================================
# Technical Metrics
# =============================================================================

ai_request_latency = Histogram(
    "fintrack_ai_request_latency_seconds",
    "AI feature request latency in seconds",
    ["feature"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

ai_provider_latency = Histogram(
    "fintrack_ai_provider_latency_seconds",
    "Generative AI provider call latency in seconds",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

ai_provider_failures = Counter(
    "fintrack_ai_provider_failures_total",
    "Total number of AI provider failures",
    ["error_type"],  # timeout, error, malformed
)

ai_provider_retries = Counter(
    "fintrack_ai_provider_retry_total",
    "Total number of AI provider retries",
)

http_requests_total = Counter(
    "fintrack_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "fintrack_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_transaction_operation(operation: str) -> None:
    """Record a successful transaction write."""
    transaction_operations.labels(operation=operation).inc()


def record_budget_alert(level: str) -> None:
    budget_alerts.labels(level=level).inc()


def record_ai_request(feature: str, outcome: str) -> None:
    ai_requests.labels(feature=feature, outcome=outcome).inc()


@contextmanager
def track_ai_request_latency(feature: str) -> Generator[None, None, None]:
    """Context manager to track AI feature latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        ai_request_latency.labels(feature=feature).observe(duration)


@contextmanager
def track_ai_provider_latency() -> Generator[None, None, None]:
    """Context manager to track raw provider call latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        ai_provider_latency.observe(duration)


def record_ai_provider_failure(error_type: str) -> None:
    ai_provider_failures.labels(error_type=error_type).inc()


def record_ai_provider_retry() -> None:
    ai_provider_retries.inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
