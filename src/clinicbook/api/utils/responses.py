"""Envelope builders shared by the routers and the exception handlers."""

from typing import Any, Dict, Optional

from fastapi import Request

from ..schemas.common import ApiResponse, ErrorResponse


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or ""


def ok(request: Request, data: Any = None, message: str = "") -> ApiResponse[Any]:
    """Wrap a payload in the success envelope, tagged with the request id."""
    return ApiResponse(success=True, message=message, request_id=_request_id(request), data=data)


def fail(
    request: Request,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> ErrorResponse:
    """Build the error envelope; ``error`` is the machine-readable code."""
    return ErrorResponse(
        error=error,
        message=message,
        request_id=_request_id(request),
        details=details or {},
    )
