"""Appointment key value object: the 6-digit code patients quote at the front desk."""

import random
import re
from dataclasses import dataclass
from typing import Any

KEY_MIN = 100000
KEY_MAX = 999999


@dataclass(frozen=True)
class AppointmentKey:
    """Immutable human-readable appointment key."""

    value: str

    def __post_init__(self) -> None:
        """Validate appointment key format."""
        if not self.value:
            raise ValueError("Appointment key cannot be empty")

        if not isinstance(self.value, str):
            raise ValueError("Appointment key must be a string")

        if not re.match(r"^[1-9]\d{5}$", self.value):
            raise ValueError("Appointment key must be a 6-digit number")

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __eq__(self, other: Any) -> bool:
        """Equality comparison."""
        if not isinstance(other, AppointmentKey):
            return False
        return self.value == other.value

    def __hash__(self) -> int:
        """Hash for use in sets and dictionaries."""
        return hash(self.value)

    @classmethod
    def generate(cls) -> "AppointmentKey":
        """Generate a uniformly random key in [100000, 999999]."""
        return cls(str(random.randint(KEY_MIN, KEY_MAX)))
