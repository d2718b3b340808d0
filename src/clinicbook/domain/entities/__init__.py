"""
Domain entities package.
"""

from .appointment import Appointment
from .schedule import DaySchedule, DoctorSchedule, default_weekly_days

__all__ = [
    "Appointment",
    "DaySchedule",
    "DoctorSchedule",
    "default_weekly_days",
]
