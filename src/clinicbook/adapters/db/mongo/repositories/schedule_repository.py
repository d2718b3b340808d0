"""
MongoDB implementation of ScheduleRepository.
"""

import logging
from datetime import date
from typing import List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from clinicbook.application.ports.repositories.schedule_repo import ScheduleRepository
from clinicbook.core.exceptions import StorageError
from clinicbook.core.utils.datetime_utils import date_to_datetime, parse_optional_date
from clinicbook.domain.entities.schedule import DaySchedule, DoctorSchedule
from clinicbook.domain.errors import ConflictError

from ..models.schedule_m import DayScheduleMongo, DoctorScheduleMongo

logger = logging.getLogger(__name__)


class MongoScheduleRepository(ScheduleRepository):
    """MongoDB implementation of ScheduleRepository."""

    async def find_by_doctor(self, doctor_id: str) -> List[DoctorSchedule]:
        """Find every schedule document of a doctor, newest first."""
        return await self._find_many({"doctor_id": doctor_id}, "find_by_doctor")

    async def find_for_week(self, doctor_id: str, day: date) -> List[DoctorSchedule]:
        """Find week-bounded schedules containing ``day``, newest first."""
        moment = date_to_datetime(day)
        return await self._find_many(
            {
                "doctor_id": doctor_id,
                "week_start": {"$lte": moment},
                "week_end": {"$gte": moment},
            },
            "find_for_week",
        )

    async def find_general(self, doctor_id: str) -> Optional[DoctorSchedule]:
        """Find the doctor's standing schedule."""
        try:
            schedule_mongo = await DoctorScheduleMongo.find_one(
                {"doctor_id": doctor_id, "is_general": True}
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to load general schedule: {e}", operation="find_general")
        if not schedule_mongo:
            return None
        return self._mongo_to_domain(schedule_mongo)

    async def find_any(self, doctor_id: str) -> List[DoctorSchedule]:
        """Find schedules regardless of bounds, newest first."""
        return await self._find_many({"doctor_id": doctor_id}, "find_any")

    async def find_by_id(self, schedule_id: str) -> Optional[DoctorSchedule]:
        """Find a schedule by ID."""
        if not ObjectId.is_valid(schedule_id):
            return None
        try:
            schedule_mongo = await DoctorScheduleMongo.get(ObjectId(schedule_id))
        except PyMongoError as e:
            raise StorageError(f"Failed to load schedule: {e}", operation="find_schedule_by_id")
        if not schedule_mongo:
            return None
        return self._mongo_to_domain(schedule_mongo)

    async def save(self, schedule: DoctorSchedule) -> DoctorSchedule:
        """Insert a schedule, or replace the one with the same doctor and bounds."""
        week_start = date_to_datetime(schedule.week_start) if schedule.week_start else None
        week_end = date_to_datetime(schedule.week_end) if schedule.week_end else None

        try:
            existing = await DoctorScheduleMongo.find_one(
                {"doctor_id": schedule.doctor_id, "week_start": week_start, "week_end": week_end}
            )
            if existing is not None:
                schedule.schedule_id = str(existing.id)
                schedule.created_at = existing.created_at
            schedule.touch()

            schedule_mongo = self._domain_to_mongo(schedule)
            await schedule_mongo.save()
        except DuplicateKeyError:
            # Another request created the general schedule between our read and write
            raise ConflictError(
                "Schedule was modified concurrently, retry the request",
                "SCHEDULE_CONFLICT",
                {"doctor_id": schedule.doctor_id},
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to save schedule: {e}", operation="save_schedule")

        return schedule

    async def delete(self, schedule_id: str) -> bool:
        """Delete a schedule by ID."""
        if not ObjectId.is_valid(schedule_id):
            return False
        try:
            result = await DoctorScheduleMongo.find_one({"_id": ObjectId(schedule_id)}).delete()
        except PyMongoError as e:
            raise StorageError(f"Failed to delete schedule: {e}", operation="delete_schedule")
        return bool(result and result.deleted_count)

    async def _find_many(self, query: dict, operation: str) -> List[DoctorSchedule]:
        try:
            schedules_mongo = await DoctorScheduleMongo.find(query).sort(
                [("created_at", -1)]
            ).to_list()
        except PyMongoError as e:
            raise StorageError(f"Failed to load schedules: {e}", operation=operation)
        return [self._mongo_to_domain(s) for s in schedules_mongo]

    def _domain_to_mongo(self, schedule: DoctorSchedule) -> DoctorScheduleMongo:
        """Convert domain entity to MongoDB model."""
        return DoctorScheduleMongo(
            id=ObjectId(schedule.schedule_id),
            doctor_id=schedule.doctor_id,
            days=[self._day_to_mongo(day) for day in schedule.days],
            week_start=date_to_datetime(schedule.week_start) if schedule.week_start else None,
            week_end=date_to_datetime(schedule.week_end) if schedule.week_end else None,
            is_general=schedule.is_general,
            created_at=schedule.created_at,
            updated_at=schedule.updated_at,
        )

    @staticmethod
    def _day_to_mongo(day: DaySchedule) -> DayScheduleMongo:
        def _str(value):
            return value.value if value is not None else None

        return DayScheduleMongo(
            day_of_week=day.day_of_week.value,
            is_off_day=day.is_off_day,
            morning_start=_str(day.morning_start),
            morning_end=_str(day.morning_end),
            evening_start=_str(day.evening_start),
            evening_end=_str(day.evening_end),
            slot_duration=day.slot_duration,
            morning_slots=[s.value for s in day.morning_slots] if day.morning_slots is not None else None,
            evening_slots=[s.value for s in day.evening_slots] if day.evening_slots is not None else None,
        )

    def _mongo_to_domain(self, schedule_mongo: DoctorScheduleMongo) -> DoctorSchedule:
        """Convert MongoDB model to domain entity."""
        return DoctorSchedule(
            schedule_id=str(schedule_mongo.id),
            doctor_id=schedule_mongo.doctor_id,
            days=[
                DaySchedule(
                    day_of_week=d.day_of_week,
                    is_off_day=d.is_off_day,
                    morning_start=d.morning_start,
                    morning_end=d.morning_end,
                    evening_start=d.evening_start,
                    evening_end=d.evening_end,
                    slot_duration=d.slot_duration,
                    morning_slots=d.morning_slots,
                    evening_slots=d.evening_slots,
                )
                for d in schedule_mongo.days
            ],
            week_start=parse_optional_date(schedule_mongo.week_start),
            week_end=parse_optional_date(schedule_mongo.week_end),
            created_at=schedule_mongo.created_at,
            updated_at=schedule_mongo.updated_at,
        )
