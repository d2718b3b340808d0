"""
Appointment ID value object for type-safe appointment identification.
Format: 24-character hex ObjectId
"""

from dataclasses import dataclass
from typing import Any

from bson import ObjectId

from ..errors import InvalidIdentifierError


@dataclass(frozen=True)
class AppointmentId:
    """Immutable appointment identifier value object."""

    value: str

    def __post_init__(self) -> None:
        """Validate appointment ID format."""
        if not isinstance(self.value, str) or not ObjectId.is_valid(self.value):
            raise InvalidIdentifierError("appointment_id", self.value)

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __eq__(self, other: Any) -> bool:
        """Equality comparison."""
        if not isinstance(other, AppointmentId):
            return False
        return self.value == other.value

    def __hash__(self) -> int:
        """Hash for use in sets and dictionaries."""
        return hash(self.value)

    def to_object_id(self) -> ObjectId:
        return ObjectId(self.value)

    @classmethod
    def generate(cls) -> "AppointmentId":
        """Generate a new appointment ID."""
        return cls(str(ObjectId()))
