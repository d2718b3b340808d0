"""Book Appointment use case: the write path that turns a chosen slot into a pending appointment."""

import logging
from typing import Optional

from ...core.config import get_settings
from ...core.exceptions import StorageError
from ...core.utils.datetime_utils import format_booking_date, parse_booking_date
from ...core.utils.string_utils import validate_party_id
from ...domain.entities.appointment import Appointment
from ...domain.errors import (
    AppointmentKeyCollisionError,
    SlotAlreadyBookedError,
    SlotNotInScheduleError,
    ValidationError,
)
from ...domain.value_objects.appointment_id import AppointmentId
from ...domain.value_objects.clock_time import ClockTime
from ...observability.metrics import record_booking_attempt, record_key_retry
from ...observability.tracing import add_span_attribute, trace_operation
from ..dto.booking_dto import BookAppointmentRequest
from ..ports.repositories.appointment_repo import AppointmentRepository
from ..services.availability_checker import AvailabilityChecker
from ..services.schedule_resolver import ScheduleResolver

logger = logging.getLogger(__name__)


async def ensure_slot_bookable(
    resolver: ScheduleResolver,
    availability_checker: AvailabilityChecker,
    doctor_id: str,
    date: str,
    time: str,
    exclude_appointment_id: Optional[AppointmentId] = None,
) -> None:
    """Raise unless ``time`` is a current slot of the doctor and nobody holds it.

    Raises:
        SlotNotInScheduleError: time is not among the resolved slots for date
        SlotAlreadyBookedError: a pending or confirmed appointment holds it
    """
    resolved = await resolver.resolve(doctor_id, date)
    slot_times = {slot.value for slot in resolved.all_slots()}
    if time not in slot_times:
        raise SlotNotInScheduleError(doctor_id, date, time)

    if not await availability_checker.is_available(
        doctor_id, date, time, exclude_appointment_id=exclude_appointment_id
    ):
        raise SlotAlreadyBookedError(doctor_id, date, time)


class BookAppointmentUseCase:
    """Use case for booking a slot for a patient."""

    def __init__(
        self,
        appointment_repository: AppointmentRepository,
        resolver: ScheduleResolver,
        availability_checker: AvailabilityChecker,
        key_max_attempts: Optional[int] = None,
    ):
        self._appointment_repository = appointment_repository
        self._resolver = resolver
        self._availability_checker = availability_checker
        if key_max_attempts is None:
            key_max_attempts = get_settings().booking.key_max_attempts
        self._key_max_attempts = key_max_attempts

    async def execute(self, request: BookAppointmentRequest) -> Appointment:
        """Execute the book appointment use case.

        The availability pre-check only saves a write; the store's unique
        slot index decides concurrent races.
        """
        doctor_id = validate_party_id("doctor_id", request.doctor_id)
        patient_id = validate_party_id("patient_id", request.patient_id)
        date = format_booking_date(parse_booking_date(request.date))
        time = ClockTime.parse(request.time).value

        with trace_operation(
            "booking.book", {"doctor_id": doctor_id, "date": date, "time": time}
        ) as span:
            try:
                await ensure_slot_bookable(
                    self._resolver, self._availability_checker, doctor_id, date, time
                )
                appointment = Appointment(
                    doctor_id=doctor_id,
                    patient_id=patient_id,
                    date=date,
                    time=time,
                    doctor_name=request.doctor_name or "Unknown Doctor",
                    patient_name=request.patient_name or "Unknown Patient",
                    doctor_address=request.doctor_address or "",
                )
                created = await self._insert_with_unique_key(appointment)
            except SlotAlreadyBookedError:
                record_booking_attempt("book", "conflict")
                logger.warning(
                    f"Booking conflict: doctor {doctor_id} {date} {time} already held "
                    f"(patient {patient_id})"
                )
                raise
            except ValidationError:
                record_booking_attempt("book", "invalid")
                raise
            except StorageError:
                record_booking_attempt("book", "error")
                raise

            add_span_attribute(span, "appointment_id", created.appointment_id.value)

        record_booking_attempt("book", "success")
        logger.info(
            f"Booked appointment {created.appointment_id} for patient {patient_id}: {created.summary()}"
        )
        return created

    async def _insert_with_unique_key(self, appointment: Appointment) -> Appointment:
        for attempt in range(1, self._key_max_attempts + 1):
            try:
                return await self._appointment_repository.insert(appointment)
            except AppointmentKeyCollisionError:
                record_key_retry()
                logger.warning(
                    f"Appointment key {appointment.appointment_key} collided "
                    f"(attempt {attempt}/{self._key_max_attempts})"
                )
                appointment.with_new_key()

        raise StorageError(
            "Could not allocate a unique appointment key",
            {"attempts": self._key_max_attempts},
            operation="insert_appointment",
        )
