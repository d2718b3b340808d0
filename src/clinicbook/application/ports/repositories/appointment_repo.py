"""
Appointment repository interface for managing bookings.
"""

from typing import Iterable, List, Optional

from clinicbook.domain.entities.appointment import Appointment
from clinicbook.domain.enums.appointment import AppointmentStatus
from clinicbook.domain.value_objects.appointment_id import AppointmentId


class AppointmentRepository:
    """Repository interface for managing appointments.

    Implementations must reject a second slot-holding appointment for the same
    (doctor_id, date, time) atomically, raising SlotAlreadyBookedError, and a
    duplicate appointment key with AppointmentKeyCollisionError.
    """

    async def find_conflict(
        self,
        doctor_id: str,
        date: str,
        time: str,
        statuses: Iterable[AppointmentStatus],
        exclude_id: Optional[AppointmentId] = None,
    ) -> Optional[Appointment]:
        """Find an appointment in one of ``statuses`` holding the exact slot."""
        raise NotImplementedError

    async def find_by_patient(
        self,
        patient_id: str,
        date: Optional[str] = None,
        statuses: Optional[Iterable[AppointmentStatus]] = None,
    ) -> List[Appointment]:
        """Find a patient's appointments, newest slot first, optionally filtered."""
        raise NotImplementedError

    async def find_by_doctor(
        self,
        doctor_id: str,
        date: Optional[str] = None,
        statuses: Optional[Iterable[AppointmentStatus]] = None,
    ) -> List[Appointment]:
        """Find a doctor's appointments, earliest slot first, optionally filtered."""
        raise NotImplementedError

    async def find_by_doctor_and_date(
        self,
        doctor_id: str,
        date: str,
        statuses: Optional[Iterable[AppointmentStatus]] = None,
    ) -> List[Appointment]:
        """Find a doctor's appointments on a date, optionally filtered by status."""
        raise NotImplementedError

    async def find_by_id(self, appointment_id: AppointmentId) -> Optional[Appointment]:
        """Find an appointment by ID."""
        raise NotImplementedError

    async def find_by_key(self, appointment_key: str) -> Optional[Appointment]:
        """Find an appointment by its 6-digit key."""
        raise NotImplementedError

    async def insert(self, appointment: Appointment) -> Appointment:
        """Insert a new appointment."""
        raise NotImplementedError

    async def update_status(self, appointment: Appointment) -> Appointment:
        """Persist the appointment's current status and updated_at."""
        raise NotImplementedError

    async def reschedule(self, appointment: Appointment) -> Appointment:
        """Persist the appointment's new date/time, guarded by the slot uniqueness rule."""
        raise NotImplementedError
