"""
Slot generation for doctor day schedules.
Turns a session window and a slot duration into bookable HH:MM start times.
"""

from typing import List, Optional, Tuple

from clinicbook.domain.entities.schedule import DaySchedule
from clinicbook.domain.errors import InvalidScheduleError
from clinicbook.domain.value_objects.clock_time import ClockTime


def generate_slots(
    start: Optional[ClockTime],
    end: Optional[ClockTime],
    duration_minutes: int,
) -> List[ClockTime]:
    """
    Generate slot start times for the half-open window [start, end).

    A slot starts at ``start`` and every ``duration_minutes`` after it while the
    start is still before ``end``; the last slot may run past ``end``.

    Args:
        start: Session start, or None when the session is not configured
        end: Session end, or None when the session is not configured
        duration_minutes: Slot length in minutes, must be positive

    Returns:
        Strictly increasing slot starts; empty when a bound is missing or
        start is not before end
    """
    if duration_minutes is None or duration_minutes <= 0:
        raise InvalidScheduleError(
            "slot_duration must be a positive number of minutes",
            {"field": "slot_duration", "value": duration_minutes},
        )
    if start is None or end is None:
        return []

    slots: List[ClockTime] = []
    current = start.minutes
    stop = end.minutes
    while current < stop:
        slots.append(ClockTime.from_minutes(current))
        current += duration_minutes
    return slots


def day_slots(day: Optional[DaySchedule]) -> Tuple[List[ClockTime], List[ClockTime]]:
    """Morning and evening slots for one day schedule.

    Off-days and missing days have no slots. Pre-materialized lists win over
    generation when present; morning and evening are never merged.
    """
    if day is None or day.is_off_day:
        return [], []

    if day.morning_slots is not None:
        morning = list(day.morning_slots)
    else:
        morning = generate_slots(day.morning_start, day.morning_end, day.slot_duration)

    if day.evening_slots is not None:
        evening = list(day.evening_slots)
    else:
        evening = generate_slots(day.evening_start, day.evening_end, day.slot_duration)

    return morning, evening


def materialize_slots(day: DaySchedule) -> DaySchedule:
    """Rebuild the cached slot lists of ``day`` from its windows and duration."""
    day.clear_materialized_slots()
    if day.is_off_day:
        day.morning_slots = []
        day.evening_slots = []
        return day
    day.morning_slots = generate_slots(day.morning_start, day.morning_end, day.slot_duration)
    day.evening_slots = generate_slots(day.evening_start, day.evening_end, day.slot_duration)
    return day
