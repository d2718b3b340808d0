"""Appointment domain entity representing one booked (doctor, date, time) slot."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ...core.utils.datetime_utils import format_booking_date, parse_booking_date
from ...core.utils.string_utils import validate_party_id
from ..enums.appointment import ALLOWED_TRANSITIONS, AppointmentStatus
from ..errors import (
    AppointmentAlreadyCancelledError,
    InvalidStatusTransitionError,
    ValidationError,
)
from ..value_objects.appointment_id import AppointmentId
from ..value_objects.appointment_key import AppointmentKey
from ..value_objects.clock_time import ClockTime


@dataclass
class Appointment:
    """Appointment domain entity.

    ``date`` and ``time`` are kept in their stored string forms
    (``YYYY-MM-DD`` and ``HH:MM``); together with ``doctor_id`` they form the
    natural booking key.
    """

    doctor_id: str
    patient_id: str
    date: str
    time: str
    appointment_key: AppointmentKey = field(default_factory=AppointmentKey.generate)
    appointment_id: AppointmentId = field(default_factory=AppointmentId.generate)
    status: AppointmentStatus = AppointmentStatus.PENDING
    doctor_name: str = "Unknown Doctor"
    patient_name: str = "Unknown Patient"
    doctor_address: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Validate appointment data."""
        self._validate_appointment_data()

    def _validate_appointment_data(self) -> None:
        self.doctor_id = validate_party_id("doctor_id", self.doctor_id)
        self.patient_id = validate_party_id("patient_id", self.patient_id)
        self.date = format_booking_date(parse_booking_date(self.date))
        self.time = ClockTime.parse(self.time).value
        try:
            self.status = AppointmentStatus(self.status)
        except ValueError:
            raise ValidationError(
                f"Unknown appointment status: {self.status}",
                "INVALID_STATUS",
                {"field": "status", "value": str(self.status)},
            )

    @property
    def holds_slot(self) -> bool:
        """Pending and confirmed appointments consume their slot."""
        return self.status.holds_slot

    def is_owned_by(self, patient_id: str) -> bool:
        return self.patient_id == patient_id

    def transition_to(self, new_status: AppointmentStatus) -> None:
        """Move to ``new_status`` if the lifecycle allows it."""
        new_status = AppointmentStatus(new_status)
        if new_status == AppointmentStatus.CANCELLED and self.status == AppointmentStatus.CANCELLED:
            raise AppointmentAlreadyCancelledError(self.appointment_id.value)
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransitionError(
                self.appointment_id.value, self.status.value, new_status.value
            )
        self.status = new_status
        self.updated_at = datetime.utcnow()

    def cancel(self) -> None:
        self.transition_to(AppointmentStatus.CANCELLED)

    def reschedule(self, new_date: str, new_time: str) -> None:
        """Move the appointment to another slot, keeping its id and key."""
        if not self.holds_slot:
            raise InvalidStatusTransitionError(
                self.appointment_id.value, self.status.value, "rescheduled"
            )
        self.date = format_booking_date(parse_booking_date(new_date))
        self.time = ClockTime.parse(new_time).value
        self.updated_at = datetime.utcnow()

    def with_new_key(self) -> None:
        """Replace the appointment key after a collision on insert."""
        self.appointment_key = AppointmentKey.generate()

    def summary(self) -> str:
        return f"{self.date} {self.time} with {self.doctor_name} (key {self.appointment_key})"
