"""
MongoDB implementation of AppointmentRepository.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from clinicbook.application.ports.repositories.appointment_repo import AppointmentRepository
from clinicbook.core.exceptions import StorageError
from clinicbook.domain.entities.appointment import Appointment
from clinicbook.domain.enums.appointment import AppointmentStatus
from clinicbook.domain.errors import (
    AppointmentKeyCollisionError,
    AppointmentNotFoundError,
    SlotAlreadyBookedError,
)
from clinicbook.domain.value_objects.appointment_id import AppointmentId
from clinicbook.domain.value_objects.appointment_key import AppointmentKey

from ..models.appointment_m import KEY_UNIQUE_INDEX, AppointmentMongo

logger = logging.getLogger(__name__)


def _is_key_violation(error: DuplicateKeyError) -> bool:
    details = error.details or {}
    key_pattern = details.get("keyPattern") or {}
    if key_pattern:
        return "appointment_key" in key_pattern
    # Servers before 4.4 only report the index name in the message
    return KEY_UNIQUE_INDEX in str(error) or "appointment_key" in str(error)


def _status_values(statuses: Iterable[AppointmentStatus]) -> List[str]:
    return [AppointmentStatus(s).value for s in statuses]


def _listing_query(
    party_field: str,
    party_id: str,
    date: Optional[str],
    statuses: Optional[Iterable[AppointmentStatus]],
) -> dict:
    query = {party_field: party_id}
    if date is not None:
        query["date"] = date
    if statuses is not None:
        query["status"] = {"$in": _status_values(statuses)}
    return query


class MongoAppointmentRepository(AppointmentRepository):
    """MongoDB implementation of AppointmentRepository."""

    async def find_conflict(
        self,
        doctor_id: str,
        date: str,
        time: str,
        statuses: Iterable[AppointmentStatus],
        exclude_id: Optional[AppointmentId] = None,
    ) -> Optional[Appointment]:
        """Find an appointment in one of ``statuses`` holding the exact slot."""
        query = {
            "doctor_id": doctor_id,
            "date": date,
            "time": time,
            "status": {"$in": _status_values(statuses)},
        }
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id.to_object_id()}

        try:
            appointment_mongo = await AppointmentMongo.find_one(query)
        except PyMongoError as e:
            raise StorageError(f"Availability lookup failed: {e}", operation="find_conflict")
        if not appointment_mongo:
            return None
        return self._mongo_to_domain(appointment_mongo)

    async def find_by_patient(
        self,
        patient_id: str,
        date: Optional[str] = None,
        statuses: Optional[Iterable[AppointmentStatus]] = None,
    ) -> List[Appointment]:
        """Find a patient's appointments, newest slot first."""
        query = _listing_query("patient_id", patient_id, date, statuses)
        try:
            appointments_mongo = await AppointmentMongo.find(query).sort(
                [("date", -1), ("time", -1)]
            ).to_list()
        except PyMongoError as e:
            raise StorageError(f"Failed to list appointments: {e}", operation="find_by_patient")
        return [self._mongo_to_domain(a) for a in appointments_mongo]

    async def find_by_doctor(
        self,
        doctor_id: str,
        date: Optional[str] = None,
        statuses: Optional[Iterable[AppointmentStatus]] = None,
    ) -> List[Appointment]:
        """Find a doctor's appointments, earliest slot first."""
        query = _listing_query("doctor_id", doctor_id, date, statuses)
        try:
            appointments_mongo = await AppointmentMongo.find(query).sort(
                [("date", 1), ("time", 1)]
            ).to_list()
        except PyMongoError as e:
            raise StorageError(f"Failed to list appointments: {e}", operation="find_by_doctor")
        return [self._mongo_to_domain(a) for a in appointments_mongo]

    async def find_by_doctor_and_date(
        self,
        doctor_id: str,
        date: str,
        statuses: Optional[Iterable[AppointmentStatus]] = None,
    ) -> List[Appointment]:
        """Find a doctor's appointments on a date, optionally filtered by status."""
        query = {"doctor_id": doctor_id, "date": date}
        if statuses is not None:
            query["status"] = {"$in": _status_values(statuses)}
        try:
            appointments_mongo = await AppointmentMongo.find(query).sort([("time", 1)]).to_list()
        except PyMongoError as e:
            raise StorageError(
                f"Failed to list booked slots: {e}", operation="find_by_doctor_and_date"
            )
        return [self._mongo_to_domain(a) for a in appointments_mongo]

    async def find_by_id(self, appointment_id: AppointmentId) -> Optional[Appointment]:
        """Find an appointment by ID."""
        try:
            appointment_mongo = await AppointmentMongo.get(appointment_id.to_object_id())
        except PyMongoError as e:
            raise StorageError(f"Failed to load appointment: {e}", operation="find_by_id")
        if not appointment_mongo:
            return None
        return self._mongo_to_domain(appointment_mongo)

    async def find_by_key(self, appointment_key: str) -> Optional[Appointment]:
        """Find an appointment by its 6-digit key."""
        try:
            appointment_mongo = await AppointmentMongo.find_one(
                {"appointment_key": appointment_key}
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to load appointment: {e}", operation="find_by_key")
        if not appointment_mongo:
            return None
        return self._mongo_to_domain(appointment_mongo)

    async def insert(self, appointment: Appointment) -> Appointment:
        """Insert a new appointment.

        The partial unique index turns a lost booking race into a
        DuplicateKeyError, reported as SlotAlreadyBookedError.
        """
        appointment_mongo = self._domain_to_mongo(appointment)
        try:
            await appointment_mongo.insert()
        except DuplicateKeyError as e:
            if _is_key_violation(e):
                raise AppointmentKeyCollisionError(appointment.appointment_key.value)
            raise SlotAlreadyBookedError(appointment.doctor_id, appointment.date, appointment.time)
        except PyMongoError as e:
            raise StorageError(f"Failed to insert appointment: {e}", operation="insert_appointment")
        return appointment

    async def update_status(self, appointment: Appointment) -> Appointment:
        """Persist the appointment's current status and updated_at."""
        return await self._set_fields(
            appointment,
            {
                "status": appointment.status.value,
                "holds_slot": appointment.holds_slot,
                "updated_at": appointment.updated_at,
            },
            "update_status",
        )

    async def reschedule(self, appointment: Appointment) -> Appointment:
        """Persist the new date and time, guarded by the slot unique index."""
        return await self._set_fields(
            appointment,
            {
                "date": appointment.date,
                "time": appointment.time,
                "updated_at": appointment.updated_at,
            },
            "reschedule",
        )

    async def _set_fields(self, appointment: Appointment, fields: dict, operation: str) -> Appointment:
        try:
            result = await AppointmentMongo.find_one(
                {"_id": appointment.appointment_id.to_object_id()}
            ).update({"$set": fields})
        except DuplicateKeyError:
            raise SlotAlreadyBookedError(appointment.doctor_id, appointment.date, appointment.time)
        except PyMongoError as e:
            raise StorageError(f"Failed to update appointment: {e}", operation=operation)

        if result is None or not result.matched_count:
            raise AppointmentNotFoundError(appointment.appointment_id.value)
        return appointment

    def _domain_to_mongo(self, appointment: Appointment) -> AppointmentMongo:
        """Convert domain entity to MongoDB model."""
        return AppointmentMongo(
            id=appointment.appointment_id.to_object_id(),
            appointment_key=appointment.appointment_key.value,
            doctor_id=appointment.doctor_id,
            patient_id=appointment.patient_id,
            date=appointment.date,
            time=appointment.time,
            status=appointment.status.value,
            holds_slot=appointment.holds_slot,
            doctor_name=appointment.doctor_name,
            patient_name=appointment.patient_name,
            doctor_address=appointment.doctor_address,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )

    def _mongo_to_domain(self, appointment_mongo: AppointmentMongo) -> Appointment:
        """Convert MongoDB model to domain entity."""
        return Appointment(
            appointment_id=AppointmentId(str(appointment_mongo.id)),
            appointment_key=AppointmentKey(appointment_mongo.appointment_key),
            doctor_id=appointment_mongo.doctor_id,
            patient_id=appointment_mongo.patient_id,
            date=appointment_mongo.date,
            time=appointment_mongo.time,
            status=AppointmentStatus(appointment_mongo.status),
            doctor_name=appointment_mongo.doctor_name,
            patient_name=appointment_mongo.patient_name,
            doctor_address=appointment_mongo.doctor_address,
            created_at=appointment_mongo.created_at or datetime.utcnow(),
            updated_at=appointment_mongo.updated_at or datetime.utcnow(),
        )
