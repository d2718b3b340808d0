"""
API schemas package.
"""

# Common schemas
from .common import (
    ApiResponse,
    ErrorResponse,
)

# Appointment schemas
from .appointments import (
    AppointmentListResponse,
    AppointmentResponse,
    AvailabilityResponse,
    BookAppointmentRequest,
    BookedSlotsResponse,
    CancelAppointmentRequest,
    RescheduleAppointmentRequest,
    UpdateAppointmentStatusRequest,
)

# Schedule schemas
from .schedules import (
    AvailableSlotsResponse,
    DayScheduleResponse,
    DayScheduleSchema,
    ResolvedScheduleResponse,
    SaveScheduleRequest,
    ScheduleResponse,
    SlotSchema,
)

__all__ = [
    # Common
    "ApiResponse",
    "ErrorResponse",

    # Appointments
    "AppointmentListResponse",
    "AppointmentResponse",
    "AvailabilityResponse",
    "BookAppointmentRequest",
    "BookedSlotsResponse",
    "CancelAppointmentRequest",
    "RescheduleAppointmentRequest",
    "UpdateAppointmentStatusRequest",

    # Schedules
    "AvailableSlotsResponse",
    "DayScheduleResponse",
    "DayScheduleSchema",
    "ResolvedScheduleResponse",
    "SaveScheduleRequest",
    "ScheduleResponse",
    "SlotSchema",
]
