"""Read-side appointment use cases."""

from typing import List, Optional

from ...core.utils.datetime_utils import format_booking_date, parse_optional_date
from ...core.utils.string_utils import validate_party_id
from ...domain.entities.appointment import Appointment
from ...domain.enums.appointment import AppointmentStatus
from ...domain.errors import AppointmentNotFoundError
from ...domain.value_objects.appointment_id import AppointmentId
from ...domain.value_objects.appointment_key import AppointmentKey
from ..ports.repositories.appointment_repo import AppointmentRepository


def _listing_filters(date: Optional[str], status: Optional[AppointmentStatus]):
    day = parse_optional_date(date)
    statuses = [AppointmentStatus(status)] if status is not None else None
    return (format_booking_date(day) if day else None), statuses


class ListPatientAppointmentsUseCase:
    """Use case for listing a patient's appointments."""

    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointment_repository = appointment_repository

    async def execute(
        self,
        patient_id: str,
        date: Optional[str] = None,
        status: Optional[AppointmentStatus] = None,
    ) -> List[Appointment]:
        patient_id = validate_party_id("patient_id", patient_id)
        day, statuses = _listing_filters(date, status)
        return await self._appointment_repository.find_by_patient(
            patient_id, date=day, statuses=statuses
        )


class ListDoctorAppointmentsUseCase:
    """Use case for a doctor's view of their bookings, e.g. pending ones awaiting a decision."""

    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointment_repository = appointment_repository

    async def execute(
        self,
        doctor_id: str,
        date: Optional[str] = None,
        status: Optional[AppointmentStatus] = None,
    ) -> List[Appointment]:
        doctor_id = validate_party_id("doctor_id", doctor_id)
        day, statuses = _listing_filters(date, status)
        return await self._appointment_repository.find_by_doctor(
            doctor_id, date=day, statuses=statuses
        )


class GetAppointmentUseCase:
    """Use case for fetching one appointment by id or by key."""

    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointment_repository = appointment_repository

    async def execute(self, appointment_id: str, patient_id: Optional[str] = None) -> Appointment:
        """Fetch by id; when ``patient_id`` is given the appointment must be theirs."""
        appointment = await self._appointment_repository.find_by_id(AppointmentId(appointment_id))
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        if patient_id is not None and not appointment.is_owned_by(patient_id):
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    async def by_key(self, appointment_key: str) -> Appointment:
        try:
            key = AppointmentKey(appointment_key)
        except ValueError:
            raise AppointmentNotFoundError(appointment_key)
        appointment = await self._appointment_repository.find_by_key(key.value)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_key)
        return appointment
