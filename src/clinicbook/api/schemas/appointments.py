"""
Appointment request and response schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ...domain.entities.appointment import Appointment
from ...domain.enums.appointment import AppointmentStatus


class BookAppointmentRequest(BaseModel):
    """Request schema for booking a slot."""

    doctor_id: str = Field(..., description="Doctor ID")
    patient_id: str = Field(..., description="Patient ID")
    date: str = Field(..., description="Appointment date, YYYY-MM-DD", examples=["2024-06-03"])
    time: str = Field(..., description="Slot start, HH:MM", examples=["09:30"])
    doctor_name: Optional[str] = Field(None, max_length=200)
    patient_name: Optional[str] = Field(None, max_length=200)
    doctor_address: Optional[str] = Field(None, max_length=500)


class RescheduleAppointmentRequest(BaseModel):
    """Request schema for moving an appointment."""

    patient_id: str = Field(..., description="Owning patient ID")
    date: str = Field(..., description="New date, YYYY-MM-DD")
    time: str = Field(..., description="New slot start, HH:MM")


class CancelAppointmentRequest(BaseModel):
    """Request schema for cancelling an appointment."""

    patient_id: str = Field(..., description="Owning patient ID")


class UpdateAppointmentStatusRequest(BaseModel):
    """Request schema for doctor-side status changes."""

    status: AppointmentStatus = Field(..., description="confirmed, rejected, completed or cancelled")
    doctor_id: Optional[str] = Field(None, description="When given, must match the appointment's doctor")


class AppointmentResponse(BaseModel):
    appointment_id: str
    appointment_key: str
    doctor_id: str
    patient_id: str
    date: str
    time: str
    status: AppointmentStatus
    doctor_name: str
    patient_name: str
    doctor_address: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            appointment_id=appointment.appointment_id.value,
            appointment_key=appointment.appointment_key.value,
            doctor_id=appointment.doctor_id,
            patient_id=appointment.patient_id,
            date=appointment.date,
            time=appointment.time,
            status=appointment.status,
            doctor_name=appointment.doctor_name,
            patient_name=appointment.patient_name,
            doctor_address=appointment.doctor_address,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )


class AppointmentListResponse(BaseModel):
    patient_id: Optional[str] = None
    doctor_id: Optional[str] = None
    date: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    appointments: List[AppointmentResponse] = Field(default_factory=list)
    total: int = 0


class BookedSlotsResponse(BaseModel):
    doctor_id: str
    date: str
    booked_times: List[str] = Field(default_factory=list)


class AvailabilityResponse(BaseModel):
    doctor_id: str
    date: str
    time: str
    available: bool
