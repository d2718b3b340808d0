"""
Shared fixtures: in-memory repositories and a FastAPI test client.

The in-memory repositories enforce the same uniqueness rules as the Mongo
indexes (one slot-holding appointment per doctor/date/time, unique keys) so
the booking paths can be exercised without a database.
"""

import asyncio
import copy
import os
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

# Settings validation requires a URI; nothing connects to it in tests
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017/clinicbook_test")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from fastapi.testclient import TestClient

from clinicbook.application.ports.repositories.appointment_repo import AppointmentRepository
from clinicbook.application.ports.repositories.schedule_repo import ScheduleRepository
from clinicbook.application.services.availability_checker import AvailabilityChecker
from clinicbook.application.services.schedule_resolver import ScheduleResolver
from clinicbook.domain.entities.appointment import Appointment
from clinicbook.domain.entities.schedule import DaySchedule, DoctorSchedule
from clinicbook.domain.enums.appointment import AppointmentStatus
from clinicbook.domain.errors import (
    AppointmentKeyCollisionError,
    AppointmentNotFoundError,
    SlotAlreadyBookedError,
)
from clinicbook.domain.value_objects.appointment_id import AppointmentId


class InMemoryScheduleRepository(ScheduleRepository):
    def __init__(self):
        self.schedules: Dict[str, DoctorSchedule] = {}

    def _newest_first(self, schedules: Iterable[DoctorSchedule]) -> List[DoctorSchedule]:
        ordered = sorted(schedules, key=lambda s: s.created_at, reverse=True)
        return [copy.deepcopy(s) for s in ordered]

    async def find_by_doctor(self, doctor_id: str) -> List[DoctorSchedule]:
        return self._newest_first(s for s in self.schedules.values() if s.doctor_id == doctor_id)

    async def find_for_week(self, doctor_id: str, day: date) -> List[DoctorSchedule]:
        return self._newest_first(
            s for s in self.schedules.values() if s.doctor_id == doctor_id and s.covers(day)
        )

    async def find_general(self, doctor_id: str) -> Optional[DoctorSchedule]:
        for schedule in self.schedules.values():
            if schedule.doctor_id == doctor_id and schedule.is_general:
                return copy.deepcopy(schedule)
        return None

    async def find_any(self, doctor_id: str) -> List[DoctorSchedule]:
        return await self.find_by_doctor(doctor_id)

    async def find_by_id(self, schedule_id: str) -> Optional[DoctorSchedule]:
        schedule = self.schedules.get(schedule_id)
        return copy.deepcopy(schedule) if schedule else None

    async def save(self, schedule: DoctorSchedule) -> DoctorSchedule:
        for existing in list(self.schedules.values()):
            if (
                existing.doctor_id == schedule.doctor_id
                and existing.week_start == schedule.week_start
                and existing.week_end == schedule.week_end
                and existing.schedule_id != schedule.schedule_id
            ):
                del self.schedules[existing.schedule_id]
                schedule.schedule_id = existing.schedule_id
                schedule.created_at = existing.created_at
        schedule.touch()
        self.schedules[schedule.schedule_id] = copy.deepcopy(schedule)
        return schedule

    async def delete(self, schedule_id: str) -> bool:
        return self.schedules.pop(schedule_id, None) is not None


class InMemoryAppointmentRepository(AppointmentRepository):
    def __init__(self):
        self.appointments: Dict[str, Appointment] = {}
        # Number of upcoming inserts that fail with a key collision
        self.forced_key_collisions = 0
        self.insert_calls = 0

    def _slot_holder(self, appointment: Appointment) -> Optional[Appointment]:
        for other in self.appointments.values():
            if (
                other.holds_slot
                and other.appointment_id != appointment.appointment_id
                and (other.doctor_id, other.date, other.time)
                == (appointment.doctor_id, appointment.date, appointment.time)
            ):
                return other
        return None

    async def find_conflict(self, doctor_id, date, time, statuses, exclude_id=None):
        statuses = set(statuses)
        found = None
        for appointment in self.appointments.values():
            if exclude_id is not None and appointment.appointment_id == exclude_id:
                continue
            if (
                appointment.status in statuses
                and (appointment.doctor_id, appointment.date, appointment.time) == (doctor_id, date, time)
            ):
                found = copy.deepcopy(appointment)
                break
        # Yield after reading so concurrent bookings all pass the pre-check
        await asyncio.sleep(0)
        return found

    def _listing(self, field_name, party_id, date, statuses):
        statuses = set(statuses) if statuses is not None else None
        return [
            a
            for a in self.appointments.values()
            if getattr(a, field_name) == party_id
            and (date is None or a.date == date)
            and (statuses is None or a.status in statuses)
        ]

    async def find_by_patient(self, patient_id: str, date=None, statuses=None) -> List[Appointment]:
        found = self._listing("patient_id", patient_id, date, statuses)
        found.sort(key=lambda a: (a.date, a.time), reverse=True)
        return [copy.deepcopy(a) for a in found]

    async def find_by_doctor(self, doctor_id: str, date=None, statuses=None) -> List[Appointment]:
        found = self._listing("doctor_id", doctor_id, date, statuses)
        found.sort(key=lambda a: (a.date, a.time))
        return [copy.deepcopy(a) for a in found]

    async def find_by_doctor_and_date(self, doctor_id, date, statuses=None):
        return await self.find_by_doctor(doctor_id, date=date, statuses=statuses)

    async def find_by_id(self, appointment_id: AppointmentId) -> Optional[Appointment]:
        appointment = self.appointments.get(appointment_id.value)
        return copy.deepcopy(appointment) if appointment else None

    async def find_by_key(self, appointment_key: str) -> Optional[Appointment]:
        for appointment in self.appointments.values():
            if appointment.appointment_key.value == appointment_key:
                return copy.deepcopy(appointment)
        return None

    async def insert(self, appointment: Appointment) -> Appointment:
        self.insert_calls += 1
        if self.forced_key_collisions > 0:
            self.forced_key_collisions -= 1
            raise AppointmentKeyCollisionError(appointment.appointment_key.value)
        if any(a.appointment_key == appointment.appointment_key for a in self.appointments.values()):
            raise AppointmentKeyCollisionError(appointment.appointment_key.value)
        if appointment.holds_slot and self._slot_holder(appointment) is not None:
            raise SlotAlreadyBookedError(appointment.doctor_id, appointment.date, appointment.time)
        self.appointments[appointment.appointment_id.value] = copy.deepcopy(appointment)
        return appointment

    async def update_status(self, appointment: Appointment) -> Appointment:
        stored = self.appointments.get(appointment.appointment_id.value)
        if stored is None:
            raise AppointmentNotFoundError(appointment.appointment_id.value)
        if appointment.holds_slot and self._slot_holder(appointment) is not None:
            raise SlotAlreadyBookedError(appointment.doctor_id, appointment.date, appointment.time)
        stored.status = appointment.status
        stored.updated_at = appointment.updated_at
        return appointment

    async def reschedule(self, appointment: Appointment) -> Appointment:
        stored = self.appointments.get(appointment.appointment_id.value)
        if stored is None:
            raise AppointmentNotFoundError(appointment.appointment_id.value)
        if self._slot_holder(appointment) is not None:
            raise SlotAlreadyBookedError(appointment.doctor_id, appointment.date, appointment.time)
        stored.date = appointment.date
        stored.time = appointment.time
        stored.updated_at = appointment.updated_at
        return appointment


def make_day(day_of_week: str, morning=None, evening=None, slot_duration=30, is_off_day=False) -> DaySchedule:
    """Build a DaySchedule from (start, end) tuples."""
    morning = morning or (None, None)
    evening = evening or (None, None)
    return DaySchedule(
        day_of_week=day_of_week,
        is_off_day=is_off_day,
        morning_start=morning[0],
        morning_end=morning[1],
        evening_start=evening[0],
        evening_end=evening[1],
        slot_duration=slot_duration,
    )


def make_schedule(doctor_id: str, days, week_start=None, week_end=None, created_at=None) -> DoctorSchedule:
    schedule = DoctorSchedule(doctor_id=doctor_id, days=list(days), week_start=week_start, week_end=week_end)
    if created_at is not None:
        schedule.created_at = created_at
    return schedule


def store_schedule(repo: InMemoryScheduleRepository, schedule: DoctorSchedule) -> DoctorSchedule:
    """Put a schedule straight into the repository, keeping its created_at."""
    repo.schedules[schedule.schedule_id] = copy.deepcopy(schedule)
    return schedule


def store_appointment(
    repo: InMemoryAppointmentRepository,
    doctor_id="doc-1",
    patient_id="pat-1",
    date="2024-06-03",
    time="09:00",
    status=AppointmentStatus.PENDING,
) -> Appointment:
    appointment = Appointment(
        doctor_id=doctor_id, patient_id=patient_id, date=date, time=time, status=status
    )
    repo.appointments[appointment.appointment_id.value] = copy.deepcopy(appointment)
    return appointment


# 2024-06-03 is a Monday
MONDAY = "2024-06-03"
SUNDAY = "2024-06-09"


@pytest.fixture
def schedule_repo() -> InMemoryScheduleRepository:
    return InMemoryScheduleRepository()


@pytest.fixture
def appointment_repo() -> InMemoryAppointmentRepository:
    return InMemoryAppointmentRepository()


@pytest.fixture
def resolver(schedule_repo) -> ScheduleResolver:
    return ScheduleResolver(schedule_repo)


@pytest.fixture
def checker(appointment_repo) -> AvailabilityChecker:
    return AvailabilityChecker(appointment_repo)


@pytest.fixture
def monday_schedule(schedule_repo) -> DoctorSchedule:
    """doc-1's general schedule: Monday 09:00-10:00 in 30 minute slots, Sunday off."""
    return store_schedule(
        schedule_repo,
        make_schedule(
            "doc-1",
            [
                make_day("Monday", morning=("09:00", "10:00")),
                make_day("Sunday", is_off_day=True),
            ],
            created_at=datetime(2024, 1, 1),
        ),
    )


@pytest.fixture
def client(schedule_repo, appointment_repo):
    """Test client wired to the in-memory repositories (lifespan not run)."""
    from clinicbook.api.deps import get_appointment_repository, get_schedule_repository
    from clinicbook.app import app

    app.dependency_overrides[get_schedule_repository] = lambda: schedule_repo
    app.dependency_overrides[get_appointment_repository] = lambda: appointment_repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
