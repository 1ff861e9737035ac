"""Prometheus metrics for monitoring charge outcomes, authorizations and notifications"""

from prometheus_client import Counter, Histogram, Gauge

# Charge metrics
charge_execution_counter = Counter(
    "bike_billing_charge_executions_total",
    "Charge execution attempts",
    ["outcome"],  # authorized | denied | skipped
)

charges_created_counter = Counter(
    "bike_billing_charges_created_total",
    "Charges opened for late returns",
)

processing_queue_gauge = Gauge(
    "bike_billing_processing_queue_depth",
    "Charges waiting in the processing queue",
)

# Payment network metrics
authorization_counter = Counter(
    "bike_billing_authorizations_total",
    "Payment authorization probes",
    ["outcome"],  # approved | refused
)

authorization_latency_histogram = Histogram(
    "payment_authorization_latency_seconds",
    "Payment network response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Notification metrics
overdue_notification_counter = Counter(
    "bike_billing_overdue_notifications_total",
    "Overdue charge notifications sent",
)

notification_failure_counter = Counter(
    "notification_failures_total",
    "Failed notification deliveries",
)


def record_authorization(approved: bool) -> None:
    """Record the outcome of a payment probe"""
    outcome = "approved" if approved else "refused"
    authorization_counter.labels(outcome=outcome).inc()


def record_charge_execution(outcome: str) -> None:
    """Record a charge execution outcome (authorized, denied or skipped)"""
    charge_execution_counter.labels(outcome=outcome).inc()
