"""
Schedule repository interface for managing doctor schedules.
"""

from datetime import date
from typing import List, Optional

from clinicbook.domain.entities.schedule import DoctorSchedule


class ScheduleRepository:
    """Repository interface for managing doctor schedules."""

    async def find_by_doctor(self, doctor_id: str) -> List[DoctorSchedule]:
        """Find every schedule document of a doctor, newest first."""
        raise NotImplementedError

    async def find_for_week(self, doctor_id: str, day: date) -> List[DoctorSchedule]:
        """Find week-bounded schedules whose [week_start, week_end] contains ``day``.

        Results are ordered most recently created first.
        """
        raise NotImplementedError

    async def find_general(self, doctor_id: str) -> Optional[DoctorSchedule]:
        """Find the doctor's standing schedule (no week bounds)."""
        raise NotImplementedError

    async def find_any(self, doctor_id: str) -> List[DoctorSchedule]:
        """Find schedules of the doctor regardless of bounds, newest first."""
        raise NotImplementedError

    async def find_by_id(self, schedule_id: str) -> Optional[DoctorSchedule]:
        """Find a schedule by ID."""
        raise NotImplementedError

    async def save(self, schedule: DoctorSchedule) -> DoctorSchedule:
        """Insert or replace a schedule.

        Saving a general schedule replaces the doctor's existing general one.
        """
        raise NotImplementedError

    async def delete(self, schedule_id: str) -> bool:
        """Delete a schedule by ID."""
        raise NotImplementedError
