"""
Slot availability checks against stored appointments.
"""

import logging
from typing import Optional, Set

from clinicbook.application.ports.repositories.appointment_repo import AppointmentRepository
from clinicbook.domain.enums.appointment import ACTIVE_STATUSES
from clinicbook.domain.value_objects.appointment_id import AppointmentId

logger = logging.getLogger(__name__)


class AvailabilityChecker:
    """Answers whether a (doctor, date, time) slot is free.

    Read-time answers are advisory; booking repeats the check and the store's
    uniqueness rule has the final say. Storage errors propagate unchanged so a
    failed lookup is never read as "available".
    """

    def __init__(self, appointment_repo: AppointmentRepository):
        self._appointment_repo = appointment_repo

    async def is_available(
        self,
        doctor_id: str,
        date: str,
        time: str,
        exclude_appointment_id: Optional[AppointmentId] = None,
    ) -> bool:
        conflict = await self._appointment_repo.find_conflict(
            doctor_id, date, time, ACTIVE_STATUSES, exclude_id=exclude_appointment_id
        )
        if conflict is not None:
            logger.debug(
                f"Slot {doctor_id} {date} {time} held by appointment {conflict.appointment_id}"
            )
        return conflict is None

    async def booked_times(self, doctor_id: str, date: str) -> Set[str]:
        """HH:MM times on ``date`` held by pending or confirmed appointments."""
        appointments = await self._appointment_repo.find_by_doctor_and_date(
            doctor_id, date, ACTIVE_STATUSES
        )
        return {appointment.time for appointment in appointments}
