"""Manage Schedule use cases: create or replace, list and delete doctor schedules."""

import logging
from typing import List

from ...core.utils.datetime_utils import parse_optional_date
from ...core.utils.string_utils import validate_party_id
from ...domain.entities.schedule import DaySchedule, DoctorSchedule
from ...domain.errors import ScheduleNotFoundError
from ..dto.booking_dto import SaveScheduleRequest
from ..ports.repositories.schedule_repo import ScheduleRepository
from ..utils.slot_generator import materialize_slots

logger = logging.getLogger(__name__)


class SaveScheduleUseCase:
    """Use case for creating or replacing a doctor schedule.

    A schedule with the same doctor and week bounds as an existing one
    replaces it; without bounds it becomes the doctor's general schedule.
    """

    def __init__(self, schedule_repository: ScheduleRepository):
        self._schedule_repository = schedule_repository

    async def execute(self, request: SaveScheduleRequest) -> DoctorSchedule:
        days = [
            DaySchedule(
                day_of_week=day.day_of_week,
                is_off_day=day.is_off_day,
                morning_start=day.morning_start,
                morning_end=day.morning_end,
                evening_start=day.evening_start,
                evening_end=day.evening_end,
                slot_duration=day.slot_duration,
            )
            for day in request.days
        ]
        schedule = DoctorSchedule(
            doctor_id=request.doctor_id,
            days=days,
            week_start=parse_optional_date(request.week_start),
            week_end=parse_optional_date(request.week_end),
        )

        # Rebuild the slot caches so they match the new windows
        for day in schedule.days:
            materialize_slots(day)

        saved = await self._schedule_repository.save(schedule)
        scope = "general" if saved.is_general else f"{request.week_start}..{request.week_end}"
        logger.info(
            f"Saved {scope} schedule {saved.schedule_id} for doctor {saved.doctor_id} "
            f"({len(saved.days)} days)"
        )
        return saved


class ListSchedulesUseCase:
    """Use case for listing a doctor's schedule documents."""

    def __init__(self, schedule_repository: ScheduleRepository):
        self._schedule_repository = schedule_repository

    async def execute(self, doctor_id: str) -> List[DoctorSchedule]:
        doctor_id = validate_party_id("doctor_id", doctor_id)
        return await self._schedule_repository.find_by_doctor(doctor_id)


class DeleteScheduleUseCase:
    """Use case for deleting one of a doctor's schedules."""

    def __init__(self, schedule_repository: ScheduleRepository):
        self._schedule_repository = schedule_repository

    async def execute(self, doctor_id: str, schedule_id: str) -> None:
        doctor_id = validate_party_id("doctor_id", doctor_id)
        schedule = await self._schedule_repository.find_by_id(schedule_id)
        if schedule is None or schedule.doctor_id != doctor_id:
            raise ScheduleNotFoundError(schedule_id)
        await self._schedule_repository.delete(schedule_id)
        logger.info(f"Deleted schedule {schedule_id} of doctor {doctor_id}")
