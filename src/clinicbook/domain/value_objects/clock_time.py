"""
Clock time value object for slot boundaries and booked times.
Format: HH:MM (24-hour, zero padded)
"""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Optional

from ..errors import InvalidTimeError

_CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

MINUTES_PER_DAY = 24 * 60


@total_ordering
@dataclass(frozen=True)
class ClockTime:
    """Immutable time-of-day value object."""

    value: str

    def __post_init__(self) -> None:
        """Validate clock time format."""
        if not isinstance(self.value, str) or not _CLOCK_PATTERN.match(self.value):
            raise InvalidTimeError(self.value)

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __eq__(self, other: Any) -> bool:
        """Equality comparison."""
        if not isinstance(other, ClockTime):
            return False
        return self.value == other.value

    def __lt__(self, other: "ClockTime") -> bool:
        if not isinstance(other, ClockTime):
            return NotImplemented
        return self.minutes < other.minutes

    def __hash__(self) -> int:
        """Hash for use in sets and dictionaries."""
        return hash(self.value)

    @property
    def minutes(self) -> int:
        """Minutes elapsed since midnight."""
        hours, minutes = self.value.split(":")
        return int(hours) * 60 + int(minutes)

    @classmethod
    def from_minutes(cls, total_minutes: int) -> "ClockTime":
        """Build from minutes since midnight (0 <= total_minutes < 1440)."""
        if not 0 <= total_minutes < MINUTES_PER_DAY:
            raise InvalidTimeError(total_minutes)
        return cls(f"{total_minutes // 60:02d}:{total_minutes % 60:02d}")

    @classmethod
    def parse(cls, value: Any) -> "ClockTime":
        """Parse user or stored input, tolerating surrounding whitespace."""
        if isinstance(value, ClockTime):
            return value
        if not isinstance(value, str):
            raise InvalidTimeError(value)
        return cls(value.strip())

    @classmethod
    def parse_optional(cls, value: Any) -> Optional["ClockTime"]:
        """Parse a possibly-missing bound; empty strings count as missing."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return cls.parse(value)
