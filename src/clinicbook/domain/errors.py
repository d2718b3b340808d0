"""
Domain-specific error types for business rule violations.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

    http_status: int = 400

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


class ValidationError(DomainError):
    """Malformed input or a request that breaks a business rule."""

    http_status = 422

    def __init__(
        self,
        message: str,
        error_code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code, details)


class ConflictError(DomainError):
    """The requested resource is already held by someone else."""

    http_status = 409

    def __init__(
        self,
        message: str,
        error_code: str = "CONFLICT",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code, details)


class NotFoundError(DomainError):
    """Referenced doctor, patient, schedule or appointment does not exist."""

    http_status = 404

    def __init__(
        self,
        message: str,
        error_code: str = "NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code, details)


class InvalidDateError(ValidationError):
    """Date is not a real YYYY-MM-DD calendar date."""

    def __init__(self, value: Any) -> None:
        message = f"Invalid date '{value}'. Expected YYYY-MM-DD"
        super().__init__(message, "INVALID_DATE", {"value": value})


class InvalidTimeError(ValidationError):
    """Time is not a valid HH:MM clock time."""

    def __init__(self, value: Any) -> None:
        message = f"Invalid time '{value}'. Expected HH:MM"
        super().__init__(message, "INVALID_TIME", {"value": value})


class InvalidIdentifierError(ValidationError):
    """Identifier has an unsupported format."""

    def __init__(self, field: str, value: Any) -> None:
        message = f"Invalid {field} format"
        super().__init__(
            message, "INVALID_IDENTIFIER", {"field": field, "value": str(value)[:80]}
        )


class InvalidScheduleError(ValidationError):
    """Schedule definition is misconfigured."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "INVALID_SCHEDULE", details)


class SlotNotInScheduleError(ValidationError):
    """Requested time is not one of the doctor's slots for that date."""

    def __init__(self, doctor_id: str, date: str, time: str) -> None:
        super().__init__(
            "slot not in schedule",
            "SLOT_NOT_IN_SCHEDULE",
            {"doctor_id": doctor_id, "date": date, "time": time},
        )


class SlotAlreadyBookedError(ConflictError):
    """Slot is held by a pending or confirmed appointment."""

    def __init__(
        self,
        doctor_id: str,
        date: str,
        time: str,
        conflict_with: Optional[str] = None,
    ) -> None:
        details = {"doctor_id": doctor_id, "date": date, "time": time}
        if conflict_with:
            details["conflict_with"] = conflict_with
        super().__init__("slot already booked", "SLOT_ALREADY_BOOKED", details)


class AppointmentKeyCollisionError(ConflictError):
    """Generated appointment key already exists."""

    def __init__(self, appointment_key: str) -> None:
        super().__init__(
            f"Appointment key '{appointment_key}' already in use",
            "APPOINTMENT_KEY_COLLISION",
            {"appointment_key": appointment_key},
        )


class AppointmentNotFoundError(NotFoundError):
    """Appointment not found, or not owned by the caller."""

    def __init__(self, appointment_id: str) -> None:
        message = f"Appointment '{appointment_id}' not found or unauthorized"
        super().__init__(
            message, "APPOINTMENT_NOT_FOUND", {"appointment_id": appointment_id}
        )


class ScheduleNotFoundError(NotFoundError):
    """Schedule document not found."""

    def __init__(self, schedule_id: str) -> None:
        message = f"Schedule '{schedule_id}' not found"
        super().__init__(message, "SCHEDULE_NOT_FOUND", {"schedule_id": schedule_id})


class AppointmentAlreadyCancelledError(ValidationError):
    """Cancellation requested for an appointment that is already cancelled."""

    def __init__(self, appointment_id: str) -> None:
        super().__init__(
            "Appointment is already cancelled",
            "APPOINTMENT_ALREADY_CANCELLED",
            {"appointment_id": appointment_id},
        )


class InvalidStatusTransitionError(ValidationError):
    """Appointment status cannot move from its current value to the requested one."""

    def __init__(self, appointment_id: str, current: str, requested: str) -> None:
        message = f"Cannot change appointment status from '{current}' to '{requested}'"
        super().__init__(
            message,
            "INVALID_STATUS_TRANSITION",
            {
                "appointment_id": appointment_id,
                "current_status": current,
                "requested_status": requested,
            },
        )
