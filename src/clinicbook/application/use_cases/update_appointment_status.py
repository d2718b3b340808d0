"""Update Appointment Status use case for doctor-side confirm, reject and complete."""

import logging

from ...core.utils.string_utils import validate_party_id
from ...domain.entities.appointment import Appointment
from ...domain.errors import AppointmentNotFoundError
from ...domain.value_objects.appointment_id import AppointmentId
from ..dto.booking_dto import UpdateAppointmentStatusRequest
from ..ports.repositories.appointment_repo import AppointmentRepository

logger = logging.getLogger(__name__)


class UpdateAppointmentStatusUseCase:
    """Use case for moving an appointment along its lifecycle."""

    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointment_repository = appointment_repository

    async def execute(self, request: UpdateAppointmentStatusRequest) -> Appointment:
        appointment = await self._appointment_repository.find_by_id(
            AppointmentId(request.appointment_id)
        )
        if appointment is None:
            raise AppointmentNotFoundError(request.appointment_id)
        if request.doctor_id is not None:
            doctor_id = validate_party_id("doctor_id", request.doctor_id)
            if appointment.doctor_id != doctor_id:
                raise AppointmentNotFoundError(request.appointment_id)

        previous = appointment.status
        appointment.transition_to(request.status)
        saved = await self._appointment_repository.update_status(appointment)

        logger.info(
            f"Appointment {saved.appointment_id} status {previous.value} -> {saved.status.value}"
        )
        return saved
