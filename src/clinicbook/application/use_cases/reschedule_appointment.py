"""Reschedule Appointment use case."""

import logging

from ...core.utils.datetime_utils import format_booking_date, parse_booking_date
from ...core.utils.string_utils import validate_party_id
from ...domain.entities.appointment import Appointment
from ...domain.errors import (
    InvalidStatusTransitionError,
    SlotAlreadyBookedError,
    ValidationError,
)
from ...domain.value_objects.clock_time import ClockTime
from ...observability.metrics import record_booking_attempt
from ...observability.tracing import trace_operation
from ..dto.booking_dto import RescheduleAppointmentRequest
from ..ports.repositories.appointment_repo import AppointmentRepository
from ..services.availability_checker import AvailabilityChecker
from ..services.schedule_resolver import ScheduleResolver
from .book_appointment import ensure_slot_bookable
from .cancel_appointment import find_owned_appointment

logger = logging.getLogger(__name__)


class RescheduleAppointmentUseCase:
    """Use case for moving an active appointment to another slot."""

    def __init__(
        self,
        appointment_repository: AppointmentRepository,
        resolver: ScheduleResolver,
        availability_checker: AvailabilityChecker,
    ):
        self._appointment_repository = appointment_repository
        self._resolver = resolver
        self._availability_checker = availability_checker

    async def execute(self, request: RescheduleAppointmentRequest) -> Appointment:
        """Move the appointment in place; id, key and status are kept."""
        patient_id = validate_party_id("patient_id", request.patient_id)
        date = format_booking_date(parse_booking_date(request.date))
        time = ClockTime.parse(request.time).value

        appointment = await find_owned_appointment(
            self._appointment_repository, request.appointment_id, patient_id
        )
        if not appointment.holds_slot:
            raise InvalidStatusTransitionError(
                appointment.appointment_id.value, appointment.status.value, "rescheduled"
            )

        previous_slot = f"{appointment.date} {appointment.time}"
        with trace_operation(
            "booking.reschedule",
            {"appointment_id": appointment.appointment_id.value, "date": date, "time": time},
        ):
            try:
                await ensure_slot_bookable(
                    self._resolver,
                    self._availability_checker,
                    appointment.doctor_id,
                    date,
                    time,
                    exclude_appointment_id=appointment.appointment_id,
                )
                appointment.reschedule(date, time)
                saved = await self._appointment_repository.reschedule(appointment)
            except SlotAlreadyBookedError:
                record_booking_attempt("reschedule", "conflict")
                logger.warning(
                    f"Reschedule conflict for appointment {appointment.appointment_id}: "
                    f"{appointment.doctor_id} {date} {time} already held"
                )
                raise
            except ValidationError:
                record_booking_attempt("reschedule", "invalid")
                raise

        record_booking_attempt("reschedule", "success")
        logger.info(
            f"Rescheduled appointment {saved.appointment_id} from {previous_slot} "
            f"to {saved.date} {saved.time}"
        )
        return saved
