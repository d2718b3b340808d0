from typing import List, Optional, Union

from pydantic import BaseModel, Field

from ...domain.entities.schedule import DaySchedule, DoctorSchedule
from ...core.utils.datetime_utils import format_booking_date


class DayScheduleSchema(BaseModel):
    """One weekday of a schedule.

    Session bounds are HH:MM; a session with either bound missing has no
    slots. ``slot_duration`` also accepts the legacy string form ("30").
    """

    day_of_week: str = Field(..., description="Monday..Sunday")
    is_off_day: bool = Field(default=False)
    morning_start: Optional[str] = None
    morning_end: Optional[str] = None
    evening_start: Optional[str] = None
    evening_end: Optional[str] = None
    slot_duration: int = Field(default=30, gt=0, le=24 * 60, description="Minutes per slot")


class DayScheduleResponse(DayScheduleSchema):
    slot_duration: int = 30
    morning_slots: Optional[List[str]] = None
    evening_slots: Optional[List[str]] = None

    @classmethod
    def from_entity(cls, day: DaySchedule) -> "DayScheduleResponse":
        def _str(value):
            return value.value if value is not None else None

        return cls(
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


class SaveScheduleRequest(BaseModel):
    """Create or replace a schedule; omit both week bounds for the general schedule."""

    week_start: Optional[str] = Field(None, description="YYYY-MM-DD, inclusive")
    week_end: Optional[str] = Field(None, description="YYYY-MM-DD, inclusive")
    days: List[DayScheduleSchema] = Field(..., min_length=1, max_length=7)


class ScheduleResponse(BaseModel):
    schedule_id: str
    doctor_id: str
    week_start: Optional[str] = None
    week_end: Optional[str] = None
    is_general: bool
    days: List[DayScheduleResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, schedule: DoctorSchedule) -> "ScheduleResponse":
        return cls(
            schedule_id=schedule.schedule_id,
            doctor_id=schedule.doctor_id,
            week_start=format_booking_date(schedule.week_start) if schedule.week_start else None,
            week_end=format_booking_date(schedule.week_end) if schedule.week_end else None,
            is_general=schedule.is_general,
            days=[DayScheduleResponse.from_entity(d) for d in schedule.days],
        )


class SlotSchema(BaseModel):
    time: str
    available: bool


class AvailableSlotsResponse(BaseModel):
    doctor_id: str
    date: str
    day_of_week: str
    provenance: str = Field(..., description="week-specific, general, fallback, default or none")
    schedule_id: Optional[str] = None
    within_range: bool
    is_off_day: bool
    slot_duration: Optional[int] = None
    morning: List[SlotSchema] = Field(default_factory=list)
    evening: List[SlotSchema] = Field(default_factory=list)


class ResolvedScheduleResponse(BaseModel):
    doctor_id: str
    date: str
    day_of_week: str
    provenance: str
    schedule_id: Optional[str] = None
    within_range: bool
    day: Optional[DayScheduleResponse] = None
    morning_slots: List[str] = Field(default_factory=list)
    evening_slots: List[str] = Field(default_factory=list)
