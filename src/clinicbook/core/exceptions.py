"""
Exception handling for the clinicbook service.

Infrastructure-level failures live here; business rule violations are in
``clinicbook.domain.errors``.
"""

from typing import Any, Dict, Optional


class ClinicBookException(Exception):
    """Base exception class for clinicbook infrastructure errors."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class StorageError(ClinicBookException):
    """Raised when a storage operation fails or its outcome is unknown."""

    http_status = 503

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
    ) -> None:
        self.operation = operation
        if operation:
            details = {**(details or {}), "operation": operation}
        super().__init__(message, "STORAGE_ERROR", details)
