"""
Custom booking metrics for clinicbook using OpenTelemetry.
"""
import logging
from typing import Optional

from opentelemetry import metrics
from opentelemetry.metrics import Counter, Histogram

logger = logging.getLogger(__name__)

meter = metrics.get_meter("clinicbook")

# Initialize custom metrics (lazy initialization)
_metrics_initialized = False
_booking_counter: Optional[Counter] = None
_conflict_counter: Optional[Counter] = None
_key_retry_counter: Optional[Counter] = None
_resolve_counter: Optional[Counter] = None
_request_counter: Optional[Counter] = None
_request_latency_histogram: Optional[Histogram] = None


def _initialize_metrics() -> None:
    """Initialize custom metrics instruments."""
    global _metrics_initialized, _booking_counter, _conflict_counter
    global _key_retry_counter, _resolve_counter
    global _request_counter, _request_latency_histogram

    if _metrics_initialized:
        return

    _booking_counter = meter.create_counter(
        name="clinicbook.booking.attempts",
        description="Booking attempts by outcome",
        unit="1",
    )
    _conflict_counter = meter.create_counter(
        name="clinicbook.booking.conflicts",
        description="Bookings rejected because the slot was taken",
        unit="1",
    )
    _key_retry_counter = meter.create_counter(
        name="clinicbook.booking.key_retries",
        description="Appointment key collisions retried with a fresh key",
        unit="1",
    )
    _resolve_counter = meter.create_counter(
        name="clinicbook.schedule.resolutions",
        description="Schedule resolutions by provenance",
        unit="1",
    )
    _request_counter = meter.create_counter(
        name="clinicbook.http.requests",
        description="Total HTTP requests",
        unit="1",
    )
    _request_latency_histogram = meter.create_histogram(
        name="clinicbook.http.latency",
        description="HTTP request latency in milliseconds",
        unit="ms",
    )
    _metrics_initialized = True
    logger.debug("Custom metrics initialized")


def record_booking_attempt(operation: str, outcome: str) -> None:
    """
    Record a booking attempt.

    Args:
        operation: "book" or "reschedule"
        outcome: "success", "conflict", "invalid" or "error"
    """
    _initialize_metrics()
    _booking_counter.add(1, {"operation": operation, "outcome": outcome})
    if outcome == "conflict":
        _conflict_counter.add(1, {"operation": operation})


def record_key_retry() -> None:
    _initialize_metrics()
    _key_retry_counter.add(1)


def record_schedule_resolution(provenance: str) -> None:
    _initialize_metrics()
    _resolve_counter.add(1, {"provenance": provenance})


def record_http_request(method: str, path: str, status_code: int, latency_ms: float) -> None:
    """
    Record an HTTP request metric.

    Args:
        method: HTTP method (GET, POST, etc.)
        path: Request path
        status_code: HTTP status code
        latency_ms: Request latency in milliseconds
    """
    _initialize_metrics()
    attributes = {"method": method, "path": path, "status_code": str(status_code)}
    _request_counter.add(1, attributes)
    _request_latency_histogram.record(latency_ms, attributes)
