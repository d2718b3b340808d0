"""
Response envelopes shared by every endpoint.

Successful calls return ``ApiResponse[T]``; failures return ``ErrorResponse``
with a machine-readable ``error`` code. Both echo the X-Request-ID.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


def _utc_now_iso() -> str:
    return datetime.utcnow().isoformat()


def _new_request_id() -> str:
    return str(uuid.uuid4())


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope around an endpoint payload."""

    success: bool = Field(True, description="Always true for this envelope")
    message: str = Field("", description="Short human-readable outcome")
    timestamp: str = Field(default_factory=_utc_now_iso, description="UTC, ISO 8601")
    request_id: str = Field(default_factory=_new_request_id, description="Echo of X-Request-ID")
    data: Optional[T] = Field(None, description="Endpoint payload")


class ErrorResponse(BaseModel):
    """Error envelope produced by the global exception handlers."""

    success: bool = Field(False, description="Always false for this envelope")
    error: str = Field(..., description="Error code, e.g. SLOT_ALREADY_BOOKED")
    message: str = Field(..., description="Human-readable explanation")
    details: Optional[Dict[str, Any]] = Field(None, description="Structured context for the error")
    timestamp: str = Field(default_factory=_utc_now_iso, description="UTC, ISO 8601")
    request_id: str = Field(default_factory=_new_request_id, description="Echo of X-Request-ID")
