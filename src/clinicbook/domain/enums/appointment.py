"""
Appointment status enum and the transitions allowed between statuses.
"""

from enum import Enum
from typing import Dict, FrozenSet


class AppointmentStatus(str, Enum):
    """Appointment lifecycle states."""

    PENDING = "pending"      # Created by booking, awaiting the doctor
    CONFIRMED = "confirmed"  # Accepted by the doctor
    CANCELLED = "cancelled"  # Withdrawn by the patient or the system
    COMPLETED = "completed"  # Visit took place
    REJECTED = "rejected"    # Declined by the doctor

    @property
    def holds_slot(self) -> bool:
        """Whether an appointment in this state consumes its time slot."""
        return self in ACTIVE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]


# Only these states block a (doctor, date, time) slot
ACTIVE_STATUSES: FrozenSet[AppointmentStatus] = frozenset(
    {AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED}
)

ALLOWED_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.PENDING: frozenset(
        {
            AppointmentStatus.CONFIRMED,
            AppointmentStatus.REJECTED,
            AppointmentStatus.CANCELLED,
        }
    ),
    AppointmentStatus.CONFIRMED: frozenset(
        {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.CANCELLED: frozenset(),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.REJECTED: frozenset(),
}
