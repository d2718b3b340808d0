"""
Value objects package for domain layer.
"""

from .appointment_id import AppointmentId
from .appointment_key import AppointmentKey
from .clock_time import ClockTime

__all__ = [
    "AppointmentId",
    "AppointmentKey",
    "ClockTime",
]
