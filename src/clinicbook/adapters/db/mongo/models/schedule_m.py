"""MongoDB Beanie models for doctor schedule documents."""

from datetime import datetime
from typing import List, Optional, Union

from beanie import Document
from pydantic import BaseModel, Field
from pymongo import ASCENDING, IndexModel


class DayScheduleMongo(BaseModel):
    """Embedded model for one weekday of a schedule."""

    day_of_week: str = Field(..., description="Weekday name, Monday..Sunday")
    is_off_day: bool = Field(default=False)
    morning_start: Optional[str] = Field(None, description="HH:MM")
    morning_end: Optional[str] = Field(None, description="HH:MM")
    evening_start: Optional[str] = Field(None, description="HH:MM")
    evening_end: Optional[str] = Field(None, description="HH:MM")
    # Older documents store the duration as a string ("30")
    slot_duration: Union[int, str] = Field(default=30, description="Slot length in minutes")
    morning_slots: Optional[List[str]] = Field(None, description="Pre-materialized morning slot starts")
    evening_slots: Optional[List[str]] = Field(None, description="Pre-materialized evening slot starts")


class DoctorScheduleMongo(Document):
    """MongoDB model for DoctorSchedule entity."""

    doctor_id: str = Field(..., description="Doctor ID")
    days: List[DayScheduleMongo] = Field(default_factory=list)
    week_start: Optional[datetime] = Field(None, description="First covered date (midnight UTC)")
    week_end: Optional[datetime] = Field(None, description="Last covered date (midnight UTC)")
    is_general: bool = Field(default=True, description="True when the schedule has no week bounds")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "doctor_schedules"
        indexes = [
            "doctor_id",
            [("doctor_id", 1), ("week_start", 1), ("week_end", 1)],  # Week-specific lookups
            [("doctor_id", 1), ("created_at", -1)],  # Newest-first listing
            # At most one general schedule per doctor
            IndexModel(
                [("doctor_id", ASCENDING)],
                name="doctor_general_schedule_unique",
                unique=True,
                partialFilterExpression={"is_general": True},
            ),
        ]
