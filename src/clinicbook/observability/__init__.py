"""
Observability module for tracing and metrics.

Provides:
- Custom tracing spans for schedule resolution and booking
- Custom metrics for booking outcomes and HTTP requests
"""

from .tracing import (
    trace_operation,
    add_span_attribute,
)

from .metrics import (
    record_booking_attempt,
    record_key_retry,
    record_schedule_resolution,
    record_http_request,
)

__all__ = [
    # Tracing
    "trace_operation",
    "add_span_attribute",
    # Metrics
    "record_booking_attempt",
    "record_key_retry",
    "record_schedule_resolution",
    "record_http_request",
]
