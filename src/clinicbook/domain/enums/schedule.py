"""
Weekday names and schedule provenance tags.
"""

from datetime import date
from enum import Enum


class Weekday(str, Enum):
    """Weekday names as stored on day schedules (Monday first)."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        """Weekday of a calendar date, independent of locale and timezone."""
        return list(cls)[day.weekday()]

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Case-insensitive lookup by name ("monday", "MONDAY", "Monday")."""
        if isinstance(value, Weekday):
            return value
        if not isinstance(value, str):
            raise ValueError(f"{value!r} is not a weekday name")
        normalized = value.strip().capitalize()
        return cls(normalized)


class ScheduleProvenance(str, Enum):
    """Which resolution strategy produced a day schedule."""

    WEEK_SPECIFIC = "week-specific"
    GENERAL = "general"
    FALLBACK = "fallback"
    DEFAULT = "default"
    NONE = "none"  # Nothing applicable was found
