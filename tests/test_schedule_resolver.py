"""
Schedule resolution tests: strategy order, off-days and the default week.
"""

from datetime import date, datetime

import pytest

from clinicbook.application.services.schedule_resolver import (
    ScheduleResolver,
    general_strategy,
    week_specific_strategy,
)
from clinicbook.domain.enums.schedule import ScheduleProvenance, Weekday
from clinicbook.domain.errors import InvalidDateError, InvalidIdentifierError

from conftest import MONDAY, SUNDAY, make_day, make_schedule, store_schedule


def _times(slots):
    return [s.value for s in slots]


async def test_general_schedule_applies(resolver, monday_schedule):
    resolved = await resolver.resolve("doc-1", MONDAY)

    assert resolved.provenance == ScheduleProvenance.GENERAL
    assert resolved.weekday == Weekday.MONDAY
    assert resolved.schedule_id == monday_schedule.schedule_id
    assert resolved.within_range
    assert _times(resolved.all_slots()) == ["09:00", "09:30"]


async def test_week_specific_overrides_general(resolver, schedule_repo, monday_schedule):
    week = store_schedule(
        schedule_repo,
        make_schedule(
            "doc-1",
            [make_day("Monday", morning=("11:00", "12:00"))],
            week_start=date(2024, 6, 3),
            week_end=date(2024, 6, 9),
        ),
    )

    resolved = await resolver.resolve("doc-1", MONDAY)

    assert resolved.provenance == ScheduleProvenance.WEEK_SPECIFIC
    assert resolved.schedule_id == week.schedule_id
    assert _times(resolved.all_slots()) == ["11:00", "11:30"]


async def test_week_specific_outside_range_is_ignored(resolver, schedule_repo, monday_schedule):
    store_schedule(
        schedule_repo,
        make_schedule(
            "doc-1",
            [make_day("Monday", morning=("11:00", "12:00"))],
            week_start=date(2024, 6, 10),
            week_end=date(2024, 6, 16),
        ),
    )

    resolved = await resolver.resolve("doc-1", MONDAY)

    assert resolved.provenance == ScheduleProvenance.GENERAL


async def test_week_without_the_weekday_falls_through_to_general(resolver, schedule_repo, monday_schedule):
    store_schedule(
        schedule_repo,
        make_schedule(
            "doc-1",
            [make_day("Tuesday", morning=("11:00", "12:00"))],
            week_start=date(2024, 6, 3),
            week_end=date(2024, 6, 9),
        ),
    )

    resolved = await resolver.resolve("doc-1", MONDAY)

    assert resolved.provenance == ScheduleProvenance.GENERAL
    assert resolved.schedule_id == monday_schedule.schedule_id


async def test_overlapping_weeks_most_recent_wins(resolver, schedule_repo):
    store_schedule(
        schedule_repo,
        make_schedule(
            "doc-1",
            [make_day("Monday", morning=("08:00", "09:00"))],
            week_start=date(2024, 6, 1),
            week_end=date(2024, 6, 30),
            created_at=datetime(2024, 5, 1),
        ),
    )
    newer = store_schedule(
        schedule_repo,
        make_schedule(
            "doc-1",
            [make_day("Monday", morning=("15:00", "16:00"))],
            week_start=date(2024, 6, 3),
            week_end=date(2024, 6, 9),
            created_at=datetime(2024, 5, 20),
        ),
    )

    resolved = await resolver.resolve("doc-1", MONDAY)

    assert resolved.schedule_id == newer.schedule_id
    assert _times(resolved.all_slots()) == ["15:00", "15:30"]


async def test_fallback_uses_out_of_range_schedule(resolver, schedule_repo):
    stale = store_schedule(
        schedule_repo,
        make_schedule(
            "doc-1",
            [make_day("Monday", morning=("10:00", "11:00"))],
            week_start=date(2024, 1, 1),
            week_end=date(2024, 1, 7),
        ),
    )

    resolved = await resolver.resolve("doc-1", MONDAY)

    assert resolved.provenance == ScheduleProvenance.FALLBACK
    assert resolved.schedule_id == stale.schedule_id
    assert resolved.within_range is False
    assert _times(resolved.all_slots()) == ["10:00", "10:30"]


async def test_off_day_counts_as_found(resolver, schedule_repo, monday_schedule):
    # An older schedule with Sunday hours must not leak through the general off-day
    store_schedule(
        schedule_repo,
        make_schedule(
            "doc-1",
            [make_day("Sunday", morning=("09:00", "10:00"))],
            week_start=date(2023, 1, 1),
            week_end=date(2023, 1, 7),
        ),
    )

    resolved = await resolver.resolve("doc-1", SUNDAY)

    assert resolved.provenance == ScheduleProvenance.GENERAL
    assert resolved.is_off_day
    assert resolved.all_slots() == []


async def test_default_week_only_without_any_schedule(resolver):
    resolved = await resolver.resolve("new-doctor", MONDAY)

    assert resolved.provenance == ScheduleProvenance.DEFAULT
    assert resolved.schedule_id is None
    morning, evening = resolved.slots()
    assert _times(morning)[0] == "09:00"
    assert _times(morning)[-1] == "11:30"
    assert _times(evening)[0] == "14:00"
    assert _times(evening)[-1] == "17:30"


async def test_default_sunday_is_off(resolver):
    resolved = await resolver.resolve("new-doctor", SUNDAY)

    assert resolved.provenance == ScheduleProvenance.DEFAULT
    assert resolved.is_off_day
    assert resolved.all_slots() == []


async def test_none_when_schedules_lack_the_weekday(resolver, monday_schedule):
    # doc-1 has Monday and Sunday only; 2024-06-04 is a Tuesday
    resolved = await resolver.resolve("doc-1", "2024-06-04")

    assert resolved.provenance == ScheduleProvenance.NONE
    assert resolved.day is None
    assert resolved.within_range is False
    assert resolved.all_slots() == []


async def test_custom_strategy_order(schedule_repo, monday_schedule):
    store_schedule(
        schedule_repo,
        make_schedule(
            "doc-1",
            [make_day("Monday", morning=("11:00", "12:00"))],
            week_start=date(2024, 6, 3),
            week_end=date(2024, 6, 9),
        ),
    )
    resolver = ScheduleResolver(schedule_repo, strategies=[general_strategy, week_specific_strategy])

    resolved = await resolver.resolve("doc-1", MONDAY)

    assert resolved.provenance == ScheduleProvenance.GENERAL


async def test_invalid_input_is_rejected(resolver):
    with pytest.raises(InvalidDateError):
        await resolver.resolve("doc-1", "2024-13-01")
    with pytest.raises(InvalidIdentifierError):
        await resolver.resolve("doc 1", MONDAY)
