"""Booking and schedule DTOs passed between the API and the use cases."""

from dataclasses import dataclass, field
from typing import List, Optional

from ...domain.enums.appointment import AppointmentStatus


@dataclass
class BookAppointmentRequest:
    """Request DTO for booking a slot."""

    doctor_id: str
    patient_id: str
    date: str
    time: str
    doctor_name: Optional[str] = None
    patient_name: Optional[str] = None
    doctor_address: Optional[str] = None


@dataclass
class RescheduleAppointmentRequest:
    """Request DTO for moving an appointment to another slot."""

    appointment_id: str
    patient_id: str
    date: str
    time: str


@dataclass
class CancelAppointmentRequest:
    """Request DTO for a patient cancelling their appointment."""

    appointment_id: str
    patient_id: str


@dataclass
class UpdateAppointmentStatusRequest:
    """Request DTO for doctor-side status changes."""

    appointment_id: str
    status: AppointmentStatus
    doctor_id: Optional[str] = None


@dataclass
class SlotView:
    """One slot start with its advisory availability."""

    time: str
    available: bool


@dataclass
class AvailableSlotsResponse:
    """Response DTO for the available slots of a doctor on a date."""

    doctor_id: str
    date: str
    day_of_week: str
    provenance: str
    schedule_id: Optional[str]
    within_range: bool
    is_off_day: bool
    slot_duration: Optional[int]
    morning: List[SlotView] = field(default_factory=list)
    evening: List[SlotView] = field(default_factory=list)

    @property
    def available_times(self) -> List[str]:
        return [slot.time for slot in self.morning + self.evening if slot.available]


@dataclass
class DayScheduleInput:
    """One weekday entry of a schedule being saved."""

    day_of_week: str
    is_off_day: bool = False
    morning_start: Optional[str] = None
    morning_end: Optional[str] = None
    evening_start: Optional[str] = None
    evening_end: Optional[str] = None
    slot_duration: int = 30


@dataclass
class SaveScheduleRequest:
    """Request DTO for creating or replacing a doctor schedule."""

    doctor_id: str
    days: List[DayScheduleInput]
    week_start: Optional[str] = None
    week_end: Optional[str] = None
