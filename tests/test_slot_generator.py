"""
Slot generation tests.
"""

import pytest

from clinicbook.application.utils.slot_generator import day_slots, generate_slots, materialize_slots
from clinicbook.domain.errors import InvalidScheduleError
from clinicbook.domain.value_objects.clock_time import ClockTime

from conftest import make_day


def _times(slots):
    return [s.value for s in slots]


def test_generates_half_open_window():
    slots = generate_slots(ClockTime("09:00"), ClockTime("10:00"), 30)
    assert _times(slots) == ["09:00", "09:30"]


def test_last_slot_may_overrun_window_end():
    slots = generate_slots(ClockTime("09:00"), ClockTime("10:00"), 45)
    assert _times(slots) == ["09:00", "09:45"]


def test_start_equal_to_end_yields_nothing():
    assert generate_slots(ClockTime("09:00"), ClockTime("09:00"), 15) == []


def test_inverted_window_yields_nothing():
    assert generate_slots(ClockTime("12:00"), ClockTime("09:00"), 30) == []


def test_missing_bound_yields_nothing():
    assert generate_slots(None, ClockTime("12:00"), 30) == []
    assert generate_slots(ClockTime("09:00"), None, 30) == []


@pytest.mark.parametrize("duration", [0, -15])
def test_non_positive_duration_is_rejected(duration):
    with pytest.raises(InvalidScheduleError):
        generate_slots(ClockTime("09:00"), ClockTime("10:00"), duration)


def test_window_ending_at_midnight_edge():
    slots = generate_slots(ClockTime("23:00"), ClockTime("23:59"), 30)
    assert _times(slots) == ["23:00", "23:30"]


def test_day_slots_keeps_sessions_separate():
    day = make_day("Monday", morning=("09:00", "10:00"), evening=("14:00", "15:00"), slot_duration=20)
    morning, evening = day_slots(day)
    assert _times(morning) == ["09:00", "09:20", "09:40"]
    assert _times(evening) == ["14:00", "14:20", "14:40"]


def test_day_slots_off_day_and_missing_day():
    off = make_day("Sunday", morning=("09:00", "12:00"), is_off_day=True)
    assert day_slots(off) == ([], [])
    assert day_slots(None) == ([], [])


def test_day_slots_prefers_materialized_lists():
    day = make_day("Monday", morning=("09:00", "10:00"))
    day.morning_slots = [ClockTime("11:00")]
    day.evening_slots = []
    morning, evening = day_slots(day)
    assert _times(morning) == ["11:00"]
    assert evening == []


def test_update_sessions_drops_stale_materialized_slots():
    day = materialize_slots(make_day("Monday", morning=("09:00", "10:00")))
    assert _times(day.morning_slots) == ["09:00", "09:30"]

    day.update_sessions(slot_duration=15)

    assert day.morning_slots is None
    morning, _ = day_slots(day)
    assert _times(morning) == ["09:00", "09:15", "09:30", "09:45"]


def test_materialize_off_day_stores_empty_lists():
    day = materialize_slots(make_day("Sunday", morning=("09:00", "10:00"), is_off_day=True))
    assert day.morning_slots == []
    assert day.evening_slots == []


def test_string_duration_is_accepted():
    day = make_day("Monday", morning=("09:00", "10:00"), slot_duration="30")
    assert day.slot_duration == 30
    morning, _ = day_slots(day)
    assert _times(morning) == ["09:00", "09:30"]
