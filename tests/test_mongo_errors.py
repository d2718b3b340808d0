"""
Error translation in the Mongo appointment repository.

The unique indexes are the final word on slot and key conflicts, so every
DuplicateKeyError must surface as the matching domain error and every other
driver failure as a StorageError.
"""

import pytest
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from clinicbook.adapters.db.mongo.models.appointment_m import AppointmentMongo
from clinicbook.adapters.db.mongo.repositories.appointment_repository import (
    MongoAppointmentRepository,
    _is_key_violation,
)
from clinicbook.core.exceptions import StorageError
from clinicbook.domain.entities.appointment import Appointment
from clinicbook.domain.errors import (
    AppointmentKeyCollisionError,
    AppointmentNotFoundError,
    SlotAlreadyBookedError,
)

SLOT_PATTERN = {"doctor_id": 1, "date": 1, "time": 1}
KEY_PATTERN = {"appointment_key": 1}


def _duplicate(key_pattern):
    return DuplicateKeyError("E11000 duplicate key error", 11000, {"keyPattern": key_pattern})


class _FailingDocument:
    def __init__(self, error):
        self.error = error

    async def insert(self):
        raise self.error


class _FailingUpdate:
    def __init__(self, error=None, matched_count=1):
        self.error = error
        self.matched_count = matched_count

    async def update(self, *args, **kwargs):
        if self.error is not None:
            raise self.error
        return self


@pytest.fixture
def repo():
    return MongoAppointmentRepository()


@pytest.fixture
def appointment():
    return Appointment(doctor_id="doc-1", patient_id="pat-1", date="2024-06-03", time="09:00")


def test_key_pattern_identifies_key_collision():
    assert _is_key_violation(_duplicate(KEY_PATTERN))


def test_key_pattern_identifies_slot_collision():
    assert not _is_key_violation(_duplicate(SLOT_PATTERN))


def test_index_name_fallback():
    error = DuplicateKeyError(
        "E11000 duplicate key error collection: clinicbook.appointments "
        "index: appointment_key_unique dup key: { appointment_key: \"123456\" }",
        11000,
    )
    assert _is_key_violation(error)

    slot_error = DuplicateKeyError(
        "E11000 duplicate key error collection: clinicbook.appointments "
        "index: doctor_date_time_active_unique dup key: { doctor_id: \"doc-1\" }",
        11000,
    )
    assert not _is_key_violation(slot_error)


async def test_insert_slot_violation_is_a_booking_conflict(repo, appointment, monkeypatch):
    monkeypatch.setattr(repo, "_domain_to_mongo", lambda a: _FailingDocument(_duplicate(SLOT_PATTERN)))

    with pytest.raises(SlotAlreadyBookedError) as exc_info:
        await repo.insert(appointment)

    assert exc_info.value.error_code == "SLOT_ALREADY_BOOKED"
    assert exc_info.value.http_status == 409


async def test_insert_key_violation_asks_for_a_new_key(repo, appointment, monkeypatch):
    monkeypatch.setattr(repo, "_domain_to_mongo", lambda a: _FailingDocument(_duplicate(KEY_PATTERN)))

    with pytest.raises(AppointmentKeyCollisionError):
        await repo.insert(appointment)


async def test_insert_driver_failure_is_a_storage_error(repo, appointment, monkeypatch):
    monkeypatch.setattr(
        repo, "_domain_to_mongo", lambda a: _FailingDocument(ServerSelectionTimeoutError("no primary"))
    )

    with pytest.raises(StorageError) as exc_info:
        await repo.insert(appointment)

    assert exc_info.value.http_status == 503
    assert exc_info.value.details["operation"] == "insert_appointment"


async def test_reschedule_onto_held_slot_is_a_booking_conflict(repo, appointment, monkeypatch):
    monkeypatch.setattr(
        AppointmentMongo, "find_one", lambda *args, **kwargs: _FailingUpdate(_duplicate(SLOT_PATTERN))
    )
    appointment.reschedule("2024-06-03", "09:30")

    with pytest.raises(SlotAlreadyBookedError) as exc_info:
        await repo.reschedule(appointment)

    assert exc_info.value.details["time"] == "09:30"


async def test_status_update_driver_failure_is_a_storage_error(repo, appointment, monkeypatch):
    monkeypatch.setattr(
        AppointmentMongo, "find_one", lambda *args, **kwargs: _FailingUpdate(ServerSelectionTimeoutError("down"))
    )
    appointment.cancel()

    with pytest.raises(StorageError) as exc_info:
        await repo.update_status(appointment)

    assert exc_info.value.details["operation"] == "update_status"


async def test_update_of_missing_appointment_is_not_found(repo, appointment, monkeypatch):
    monkeypatch.setattr(AppointmentMongo, "find_one", lambda *args, **kwargs: _FailingUpdate(matched_count=0))
    appointment.cancel()

    with pytest.raises(AppointmentNotFoundError):
        await repo.update_status(appointment)
