"""
Schedule resolution for a doctor on a calendar date.

Resolution walks an ordered list of strategies and keeps the first one that
finds a day entry for the requested weekday:

1. week-specific: a week-bounded schedule whose range contains the date
2. general: the doctor's standing weekly schedule
3. fallback: any schedule of the doctor, ignoring its bounds
4. default: a synthesized clinic week, only for doctors with no schedules

An off-day entry still counts as found; it resolves to no slots.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from clinicbook.application.ports.repositories.schedule_repo import ScheduleRepository
from clinicbook.application.utils.slot_generator import day_slots
from clinicbook.core.utils.datetime_utils import format_booking_date, parse_booking_date
from clinicbook.core.utils.string_utils import validate_party_id
from clinicbook.domain.entities.schedule import DaySchedule, DoctorSchedule, default_weekly_days
from clinicbook.domain.enums.schedule import ScheduleProvenance, Weekday
from clinicbook.domain.value_objects.clock_time import ClockTime
from clinicbook.observability.metrics import record_schedule_resolution
from clinicbook.observability.tracing import add_span_attribute, trace_operation

logger = logging.getLogger(__name__)


@dataclass
class ResolvedSchedule:
    """Day schedule chosen for a doctor on a date, with where it came from."""

    doctor_id: str
    date: date
    weekday: Weekday
    provenance: ScheduleProvenance
    day: Optional[DaySchedule] = None
    schedule_id: Optional[str] = None
    within_range: bool = True

    @property
    def is_off_day(self) -> bool:
        return self.day is None or self.day.is_off_day

    def slots(self) -> Tuple[List[ClockTime], List[ClockTime]]:
        """Morning and evening slot starts; both empty when nothing applies."""
        return day_slots(self.day)

    def all_slots(self) -> List[ClockTime]:
        morning, evening = self.slots()
        return morning + evening


ResolutionStrategy = Callable[
    [ScheduleRepository, str, date, Weekday], Awaitable[Optional[ResolvedSchedule]]
]


def _from_schedule(
    schedule: DoctorSchedule,
    doctor_id: str,
    day: date,
    weekday: Weekday,
    provenance: ScheduleProvenance,
    within_range: bool = True,
) -> Optional[ResolvedSchedule]:
    entry = schedule.day_for(weekday)
    if entry is None:
        return None
    return ResolvedSchedule(
        doctor_id=doctor_id,
        date=day,
        weekday=weekday,
        provenance=provenance,
        day=entry,
        schedule_id=schedule.schedule_id,
        within_range=within_range,
    )


async def week_specific_strategy(
    repo: ScheduleRepository, doctor_id: str, day: date, weekday: Weekday
) -> Optional[ResolvedSchedule]:
    """Week-bounded schedules covering the date; most recently created first."""
    for schedule in await repo.find_for_week(doctor_id, day):
        resolved = _from_schedule(
            schedule, doctor_id, day, weekday, ScheduleProvenance.WEEK_SPECIFIC
        )
        if resolved is not None:
            return resolved
    return None


async def general_strategy(
    repo: ScheduleRepository, doctor_id: str, day: date, weekday: Weekday
) -> Optional[ResolvedSchedule]:
    """The doctor's standing weekly schedule."""
    schedule = await repo.find_general(doctor_id)
    if schedule is None:
        return None
    return _from_schedule(schedule, doctor_id, day, weekday, ScheduleProvenance.GENERAL)


async def any_schedule_strategy(
    repo: ScheduleRepository, doctor_id: str, day: date, weekday: Weekday
) -> Optional[ResolvedSchedule]:
    """Any schedule with the weekday, even one whose week range excludes the date."""
    for schedule in await repo.find_any(doctor_id):
        resolved = _from_schedule(
            schedule,
            doctor_id,
            day,
            weekday,
            ScheduleProvenance.FALLBACK,
            within_range=False,
        )
        if resolved is not None:
            return resolved
    return None


async def default_strategy(
    repo: ScheduleRepository, doctor_id: str, day: date, weekday: Weekday
) -> Optional[ResolvedSchedule]:
    """Synthesized clinic week, used only when the doctor has no schedules at all."""
    if await repo.find_by_doctor(doctor_id):
        return None
    entry = next(d for d in default_weekly_days() if d.day_of_week == weekday)
    return ResolvedSchedule(
        doctor_id=doctor_id,
        date=day,
        weekday=weekday,
        provenance=ScheduleProvenance.DEFAULT,
        day=entry,
    )


DEFAULT_STRATEGIES: Tuple[ResolutionStrategy, ...] = (
    week_specific_strategy,
    general_strategy,
    any_schedule_strategy,
    default_strategy,
)


async def first_success(
    strategies: Sequence[ResolutionStrategy],
    repo: ScheduleRepository,
    doctor_id: str,
    day: date,
    weekday: Weekday,
) -> Optional[ResolvedSchedule]:
    """Run strategies in order and return the first non-empty result."""
    for strategy in strategies:
        resolved = await strategy(repo, doctor_id, day, weekday)
        if resolved is not None:
            return resolved
    return None


class ScheduleResolver:
    """Resolve the effective day schedule of a doctor on a date."""

    def __init__(
        self,
        schedule_repo: ScheduleRepository,
        strategies: Optional[Sequence[ResolutionStrategy]] = None,
    ):
        self._schedule_repo = schedule_repo
        self._strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    async def resolve(self, doctor_id: str, on_date) -> ResolvedSchedule:
        """Resolve the schedule; never raises for "nothing found", only for bad input."""
        doctor_id = validate_party_id("doctor_id", doctor_id)
        day = parse_booking_date(on_date)
        weekday = Weekday.from_date(day)

        with trace_operation(
            "schedule.resolve",
            {"doctor_id": doctor_id, "date": format_booking_date(day), "weekday": weekday.value},
        ) as span:
            resolved = await first_success(
                self._strategies, self._schedule_repo, doctor_id, day, weekday
            )
            if resolved is None:
                resolved = ResolvedSchedule(
                    doctor_id=doctor_id,
                    date=day,
                    weekday=weekday,
                    provenance=ScheduleProvenance.NONE,
                    within_range=False,
                )
            add_span_attribute(span, "provenance", resolved.provenance.value)

        record_schedule_resolution(resolved.provenance.value)
        logger.debug(
            f"Resolved schedule for doctor {doctor_id} on {format_booking_date(day)} "
            f"({weekday.value}): provenance={resolved.provenance.value}, "
            f"schedule_id={resolved.schedule_id}, off_day={resolved.is_off_day}"
        )
        return resolved
