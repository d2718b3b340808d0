"""MongoDB Beanie model for appointment documents."""

from datetime import datetime

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, IndexModel

SLOT_UNIQUE_INDEX = "doctor_date_time_active_unique"
KEY_UNIQUE_INDEX = "appointment_key_unique"


class AppointmentMongo(Document):
    """MongoDB model for Appointment entity.

    ``holds_slot`` mirrors whether ``status`` is pending or confirmed and is
    the filter of the partial unique index on (doctor_id, date, time).
    """

    appointment_key: str = Field(..., description="6-digit appointment key")
    doctor_id: str = Field(..., description="Doctor ID")
    patient_id: str = Field(..., description="Patient ID")
    date: str = Field(..., description="YYYY-MM-DD")
    time: str = Field(..., description="HH:MM")
    status: str = Field(default="pending", description="pending, confirmed, cancelled, completed, rejected")
    holds_slot: bool = Field(default=True)
    doctor_name: str = Field(default="Unknown Doctor")
    patient_name: str = Field(default="Unknown Patient")
    doctor_address: str = Field(default="")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "appointments"
        indexes = [
            # One slot-holding appointment per doctor/date/time
            IndexModel(
                [("doctor_id", ASCENDING), ("date", ASCENDING), ("time", ASCENDING)],
                name=SLOT_UNIQUE_INDEX,
                unique=True,
                partialFilterExpression={"holds_slot": True},
            ),
            IndexModel(
                [("appointment_key", ASCENDING)],
                name=KEY_UNIQUE_INDEX,
                unique=True,
            ),
            [("patient_id", 1), ("date", -1), ("time", -1)],  # Patient history, newest first
            [("doctor_id", 1), ("date", 1), ("status", 1)],  # Booked slots per doctor/day
        ]
