"""Cancel Appointment use case."""

import logging

from ...core.utils.string_utils import validate_party_id
from ...domain.entities.appointment import Appointment
from ...domain.errors import AppointmentNotFoundError
from ...domain.value_objects.appointment_id import AppointmentId
from ..dto.booking_dto import CancelAppointmentRequest
from ..ports.repositories.appointment_repo import AppointmentRepository

logger = logging.getLogger(__name__)


async def find_owned_appointment(
    repository: AppointmentRepository, appointment_id: str, patient_id: str
) -> Appointment:
    """Load an appointment owned by ``patient_id``.

    A missing appointment and one owned by someone else are reported the
    same way so callers cannot probe other patients' bookings.
    """
    appointment = await repository.find_by_id(AppointmentId(appointment_id))
    if appointment is None or not appointment.is_owned_by(patient_id):
        raise AppointmentNotFoundError(appointment_id)
    return appointment


class CancelAppointmentUseCase:
    """Use case for a patient cancelling one of their appointments."""

    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointment_repository = appointment_repository

    async def execute(self, request: CancelAppointmentRequest) -> Appointment:
        """Cancel and free the slot.

        Raises AppointmentAlreadyCancelledError on a second cancel and
        InvalidStatusTransitionError for completed or rejected appointments.
        """
        patient_id = validate_party_id("patient_id", request.patient_id)
        appointment = await find_owned_appointment(
            self._appointment_repository, request.appointment_id, patient_id
        )

        previous = appointment.status
        appointment.cancel()
        saved = await self._appointment_repository.update_status(appointment)

        logger.info(
            f"Cancelled appointment {saved.appointment_id} for patient {patient_id} "
            f"(was {previous.value}); slot {saved.doctor_id} {saved.date} {saved.time} released"
        )
        return saved
