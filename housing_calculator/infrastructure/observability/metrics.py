"""Prometheus metrics for monitoring eligibility rates, household cash flow and upstream health"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "housing_calculation_total",
    "Total affordability calculations made",
    ["outcome"],  # eligible | ineligible
)

available_funds_bucket_counter = Counter(
    "housing_available_funds_bucket",
    "Post-move-in monthly available funds by bucket",
    ["bucket"],  # deficit, 0-1M, 1M-3M, 3M+
)

# Upstream service metrics
upstream_latency_histogram = Histogram(
    "upstream_latency_seconds",
    "Upstream service response time",
    ["source"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

upstream_failures_counter = Counter(
    "upstream_failures_total",
    "Failed upstream calls",
    ["source"],  # asset | housing | loan | user
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(eligible: bool, monthly_available_funds: int) -> None:
    """Record calculation metrics for monitoring eligibility rates and cash-flow distribution"""
    outcome = "eligible" if eligible else "ineligible"
    calculation_counter.labels(outcome=outcome).inc()

    if monthly_available_funds < 0:
        bucket = "deficit"
    elif monthly_available_funds <= 1_000_000:
        bucket = "0-1M"
    elif monthly_available_funds <= 3_000_000:
        bucket = "1M-3M"
    else:
        bucket = "3M+"

    available_funds_bucket_counter.labels(bucket=bucket).inc()
