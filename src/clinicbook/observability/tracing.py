"""
OpenTelemetry tracing helpers for clinicbook.

Spans wrap schedule resolution and booking operations. Without an SDK
configured the API falls back to no-op spans, so callers never branch on it.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from opentelemetry import trace
from opentelemetry.trace import Span

logger = logging.getLogger(__name__)

tracer = trace.get_tracer("clinicbook")


@contextmanager
def trace_operation(operation_name: str, attributes: Optional[dict] = None) -> Iterator[Span]:
    """
    Context manager for creating custom tracing spans.

    Args:
        operation_name: Name of the operation being traced
        attributes: Optional dictionary of attributes to add to the span

    Example:
        with trace_operation("booking.book", {"doctor_id": doctor_id}) as span:
            appointment = await repo.insert(appointment)
    """
    with tracer.start_as_current_span(operation_name) as span:
        if attributes:
            for key, value in attributes.items():
                if value is not None:
                    span.set_attribute(key, str(value))
        yield span


def add_span_attribute(span: Optional[Span], key: str, value: Any) -> None:
    """Add an attribute to a tracing span (value converted to string)."""
    if span is None:
        return
    span.set_attribute(key, str(value))
