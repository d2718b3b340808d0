"""Doctor schedule domain entities: a weekly plan made of per-weekday day schedules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, List, Optional

from bson import ObjectId

from ...core.utils.datetime_utils import format_booking_date
from ...core.utils.string_utils import validate_party_id
from ..enums.schedule import Weekday
from ..errors import InvalidScheduleError
from ..value_objects.clock_time import ClockTime


def _clock_list(values: Optional[Iterable[Any]]) -> Optional[List[ClockTime]]:
    if values is None:
        return None
    return [ClockTime.parse(v) for v in values]


@dataclass
class DaySchedule:
    """Session windows for one weekday.

    ``morning_slots``/``evening_slots`` hold pre-materialized slot starts. They
    are a cache of what the slot generator produces for the matching window
    and duration: ``update_sessions`` drops them whenever a window or the
    duration changes, so callers never read a stale list.
    """

    day_of_week: Weekday
    is_off_day: bool = False
    morning_start: Optional[ClockTime] = None
    morning_end: Optional[ClockTime] = None
    evening_start: Optional[ClockTime] = None
    evening_end: Optional[ClockTime] = None
    slot_duration: int = 30
    morning_slots: Optional[List[ClockTime]] = None
    evening_slots: Optional[List[ClockTime]] = None

    def __post_init__(self) -> None:
        try:
            self.day_of_week = Weekday.parse(self.day_of_week)
        except ValueError:
            raise InvalidScheduleError(
                f"Unknown day of week: {self.day_of_week}",
                {"field": "day_of_week", "value": str(self.day_of_week)},
            )

        self.morning_start = ClockTime.parse_optional(self.morning_start)
        self.morning_end = ClockTime.parse_optional(self.morning_end)
        self.evening_start = ClockTime.parse_optional(self.evening_start)
        self.evening_end = ClockTime.parse_optional(self.evening_end)
        self.slot_duration = self._coerce_duration(self.slot_duration)
        self.morning_slots = _clock_list(self.morning_slots)
        self.evening_slots = _clock_list(self.evening_slots)

    @staticmethod
    def _coerce_duration(value: Any) -> int:
        # Stored documents carry the duration as "30" as often as 30
        if isinstance(value, bool):
            raise InvalidScheduleError(
                "slot_duration must be a whole number of minutes",
                {"field": "slot_duration", "value": value},
            )
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            raise InvalidScheduleError(
                "slot_duration must be a whole number of minutes",
                {"field": "slot_duration", "value": value},
            )

    def update_sessions(
        self,
        *,
        morning: Optional[tuple] = None,
        evening: Optional[tuple] = None,
        slot_duration: Optional[int] = None,
        is_off_day: Optional[bool] = None,
    ) -> None:
        """Change session windows or duration and drop the materialized slots."""
        if morning is not None:
            self.morning_start = ClockTime.parse_optional(morning[0])
            self.morning_end = ClockTime.parse_optional(morning[1])
        if evening is not None:
            self.evening_start = ClockTime.parse_optional(evening[0])
            self.evening_end = ClockTime.parse_optional(evening[1])
        if slot_duration is not None:
            self.slot_duration = self._coerce_duration(slot_duration)
        if is_off_day is not None:
            self.is_off_day = bool(is_off_day)
        self.clear_materialized_slots()

    def clear_materialized_slots(self) -> None:
        self.morning_slots = None
        self.evening_slots = None


@dataclass
class DoctorSchedule:
    """A doctor's schedule document.

    Without week bounds it is the doctor's standing (general) weekly schedule;
    with both bounds it overrides the general one for dates inside the closed
    interval ``[week_start, week_end]``.
    """

    doctor_id: str
    days: List[DaySchedule] = field(default_factory=list)
    week_start: Optional[date] = None
    week_end: Optional[date] = None
    schedule_id: str = field(default_factory=lambda: str(ObjectId()))
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self._validate_schedule()

    def _validate_schedule(self) -> None:
        self.doctor_id = validate_party_id("doctor_id", self.doctor_id)

        if (self.week_start is None) != (self.week_end is None):
            raise InvalidScheduleError(
                "week_start and week_end must be provided together",
                {"week_start": self._fmt(self.week_start), "week_end": self._fmt(self.week_end)},
            )

        if self.week_start and self.week_start > self.week_end:
            raise InvalidScheduleError(
                "week_start must not be after week_end",
                {"week_start": self._fmt(self.week_start), "week_end": self._fmt(self.week_end)},
            )

        seen = set()
        for day in self.days:
            if day.day_of_week in seen:
                raise InvalidScheduleError(
                    f"Duplicate day schedule for {day.day_of_week.value}",
                    {"field": "days", "value": day.day_of_week.value},
                )
            seen.add(day.day_of_week)

    @staticmethod
    def _fmt(value: Optional[date]) -> Optional[str]:
        return format_booking_date(value) if value else None

    @property
    def is_general(self) -> bool:
        """True for the standing weekly schedule (no week bounds)."""
        return self.week_start is None

    def covers(self, day: date) -> bool:
        """Whether a week-bounded schedule applies to ``day``."""
        if self.is_general:
            return False
        return self.week_start <= day <= self.week_end

    def day_for(self, weekday: Weekday) -> Optional[DaySchedule]:
        for day in self.days:
            if day.day_of_week == weekday:
                return day
        return None

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


def default_weekly_days() -> List[DaySchedule]:
    """Schedule used when a doctor has no schedule documents at all.

    Monday to Saturday 09:00-12:00 and 14:00-18:00 in 30 minute slots,
    Sunday off.
    """
    days = [
        DaySchedule(
            day_of_week=weekday,
            morning_start="09:00",
            morning_end="12:00",
            evening_start="14:00",
            evening_end="18:00",
            slot_duration=30,
        )
        for weekday in Weekday
        if weekday != Weekday.SUNDAY
    ]
    days.append(DaySchedule(day_of_week=Weekday.SUNDAY, is_off_day=True, slot_duration=30))
    return days
