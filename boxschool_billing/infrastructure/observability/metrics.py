"""Prometheus metrics for credit plans, installment payments and HTTP latency"""

from prometheus_client import Counter, Histogram

# Credit plan metrics
schedule_counter = Counter(
    "boxschool_schedules_generated_total",
    "Installment schedules generated",
    ["source"],  # preview | credit_plan
)

installments_created_counter = Counter(
    "boxschool_installments_created_total",
    "Installment charges persisted",
)

# Payment metrics
payment_counter = Counter(
    "boxschool_payments_total",
    "Payments recorded against charges",
    ["concept", "method", "status"],
)

payment_amount_counter = Counter(
    "boxschool_payments_cents_total",
    "Cents collected by payment method",
    ["method"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_schedule(source: str, installments_created: int = 0) -> None:
    """Record a generated schedule and how many charges it produced"""
    schedule_counter.labels(source=source).inc()
    if installments_created:
        installments_created_counter.inc(installments_created)


def record_payment(concept: str, method: str, status: str, applied_cents: int) -> None:
    """Record a payment for collection dashboards"""
    payment_counter.labels(concept=concept, method=method, status=status).inc()
    if applied_cents > 0:
        payment_amount_counter.labels(method=method).inc(applied_cents)
