"""Prometheus metrics for the NIBOG Gateway service.

Business Metrics:
- nibog_payment_initiation_total: Payment initiations by outcome
- nibog_payment_status_total: Resolved payment statuses by source
- nibog_payment_record_total: Successful payments forwarded to the backend
- nibog_promo_validation_total: Promo code validations by stage and result

Technical Metrics:
- nibog_gateway_latency_seconds: PhonePe API latency
- nibog_gateway_failures_total: PhonePe API failures
- nibog_callback_verification_total: Callback signature checks
- nibog_backend_latency_seconds: Webhook backend latency
- nibog_cache_total: Cache hits and misses
- nibog_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

payment_initiation_total = Counter(
    "nibog_payment_initiation_total",
    "Total number of payment initiations",
    ["outcome"],  # initiated, rejected, failed
)

payment_status_total = Counter(
    "nibog_payment_status_total",
    "Resolved payment statuses",
    ["status", "source"],  # source: status_check, callback
)

payment_record_total = Counter(
    "nibog_payment_record_total",
    "Successful payments forwarded to the backend",
    ["outcome"],  # recorded, duplicate, skipped, failed
)

promo_validation_total = Counter(
    "nibog_promo_validation_total",
    "Promo code validations",
    ["stage", "result"],  # stage: preview, final; result: valid, invalid, error
)


# =============================================================================
# Technical Metrics
# =============================================================================

gateway_latency = Histogram(
    "nibog_gateway_latency_seconds",
    "PhonePe API latency in seconds",
    ["operation"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

gateway_failures = Counter(
    "nibog_gateway_failures_total",
    "Total number of PhonePe API failures",
    ["operation", "error_type"],  # timeout, error, invalid_response
)

callback_verification_total = Counter(
    "nibog_callback_verification_total",
    "Callback signature verifications",
    ["result"],  # valid, invalid
)

backend_latency = Histogram(
    "nibog_backend_latency_seconds",
    "Webhook backend latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

cache_total = Counter(
    "nibog_cache_total",
    "Cache lookups by result",
    ["cache", "result"],  # hit, miss
)

http_requests_total = Counter(
    "nibog_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "nibog_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_payment_initiation(outcome: str) -> None:
    """Record a payment initiation attempt."""
    payment_initiation_total.labels(outcome=outcome).inc()


def record_payment_status(status: str, source: str) -> None:
    """Record a resolved payment status."""
    payment_status_total.labels(status=status, source=source).inc()


def record_payment_record(outcome: str) -> None:
    """Record the outcome of forwarding a successful payment."""
    payment_record_total.labels(outcome=outcome).inc()


def record_promo_validation(stage: str, result: str) -> None:
    """Record a promo code validation."""
    promo_validation_total.labels(stage=stage, result=result).inc()


@contextmanager
def track_gateway_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track PhonePe API latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        gateway_latency.labels(operation=operation).observe(duration)


def record_gateway_failure(operation: str, error_type: str) -> None:
    """Record a PhonePe API failure."""
    gateway_failures.labels(operation=operation, error_type=error_type).inc()


def record_callback_verification(valid: bool) -> None:
    """Record the outcome of a callback signature check."""
    callback_verification_total.labels(result="valid" if valid else "invalid").inc()


@contextmanager
def track_backend_latency() -> Generator[None, None, None]:
    """Context manager to track webhook backend latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        backend_latency.observe(duration)


def record_cache_lookup(cache: str, hit: bool) -> None:
    """Record a cache hit or miss."""
    cache_total.labels(cache=cache, result="hit" if hit else "miss").inc()


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
