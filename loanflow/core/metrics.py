"""Prometheus metrics for the LoanFlow back office.

Metrics are organized into two categories:

Business Metrics (for Operations/Finance):
- loanflow_review_decisions_total: Review decisions by stage and outcome
- loanflow_status_transitions_total: Application status changes
- loanflow_disbursements_total: Loans disbursed
- loanflow_disbursed_amount_total: Sum of disbursed principal
- loanflow_applications_submitted_total: New applications

Technical Metrics (for Engineering/SRE):
- loanflow_workflow_latency_seconds: Review/disbursement use-case latency
- loanflow_activity_record_failures_total: Dropped notification/audit rows
- loanflow_session_fetch_latency_seconds: Session provider latency
- loanflow_session_fetch_failures_total: Session provider failures
- loanflow_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Operations/Finance dashboards)
# =============================================================================

review_decisions_total = Counter(
    "loanflow_review_decisions_total",
    "Total number of review decisions recorded",
    ["review_type", "decision"],
)

status_transitions_total = Counter(
    "loanflow_status_transitions_total",
    "Application status transitions",
    ["from_status", "to_status"],
)

disbursements_total = Counter(
    "loanflow_disbursements_total",
    "Total number of loans disbursed",
)

disbursed_amount_total = Counter(
    "loanflow_disbursed_amount_total",
    "Sum of disbursed loan principal",
)

applications_submitted_total = Counter(
    "loanflow_applications_submitted_total",
    "Total number of loan applications submitted",
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

workflow_latency = Histogram(
    "loanflow_workflow_latency_seconds",
    "Workflow use-case latency in seconds",
    ["operation"],  # review, disburse, create_loan, provide_info
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

activity_record_failures = Counter(
    "loanflow_activity_record_failures_total",
    "Notification or audit rows that could not be written",
    ["kind"],  # notification, audit
)

session_fetch_latency = Histogram(
    "loanflow_session_fetch_latency_seconds",
    "Session provider lookup latency in seconds",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

session_fetch_failures = Counter(
    "loanflow_session_fetch_failures_total",
    "Total number of session provider failures",
    ["error_type"],  # timeout, error, rejected
)

http_requests_total = Counter(
    "loanflow_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "loanflow_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_review_decision(review_type: str, decision: str) -> None:
    review_decisions_total.labels(review_type=review_type, decision=decision).inc()


def record_status_transition(from_status: str, to_status: str) -> None:
    status_transitions_total.labels(from_status=from_status, to_status=to_status).inc()


def record_disbursement(amount: float) -> None:
    """Record a disbursed loan and its principal."""
    disbursements_total.inc()
    disbursed_amount_total.inc(amount)


def record_application_submitted() -> None:
    applications_submitted_total.inc()


def record_activity_failure(kind: str) -> None:
    activity_record_failures.labels(kind=kind).inc()


@contextmanager
def track_workflow_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track workflow use-case latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        workflow_latency.labels(operation=operation).observe(duration)


@contextmanager
def track_session_fetch_latency() -> Generator[None, None, None]:
    """Context manager to track session provider latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        session_fetch_latency.observe(time.perf_counter() - start)


def record_session_fetch_failure(error_type: str) -> None:
    session_fetch_failures.labels(error_type=error_type).inc()


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
