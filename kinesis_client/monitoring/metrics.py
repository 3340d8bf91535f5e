"""Prometheus metrics for monitoring."""

from prometheus_client import Counter, Histogram, CollectorRegistry

# Create registry
registry = CollectorRegistry()

# Kinesis requests
kinesis_requests_total = Counter(
    "kinesis_requests_total",
    "Total number of Kinesis requests",
    ["action", "status_code"],
    registry=registry,
)

kinesis_transport_errors_total = Counter(
    "kinesis_transport_errors_total",
    "Total number of Kinesis transport errors",
    ["action"],
    registry=registry,
)

kinesis_request_duration_seconds = Histogram(
    "kinesis_request_duration_seconds",
    "Kinesis request duration",
    ["action"],
    registry=registry,
)

# Records
kinesis_records_put_total = Counter(
    "kinesis_records_put_total",
    "Total number of records sent in put requests",
    ["stream_name"],
    registry=registry,
)
