"""
Reschedule and doctor-side status tests.
"""

import pytest

from clinicbook.application.dto.booking_dto import (
    RescheduleAppointmentRequest,
    UpdateAppointmentStatusRequest,
)
from clinicbook.application.use_cases.list_appointments import (
    GetAppointmentUseCase,
    ListDoctorAppointmentsUseCase,
    ListPatientAppointmentsUseCase,
)
from clinicbook.application.use_cases.reschedule_appointment import RescheduleAppointmentUseCase
from clinicbook.application.use_cases.update_appointment_status import UpdateAppointmentStatusUseCase
from clinicbook.domain.enums.appointment import AppointmentStatus
from clinicbook.domain.errors import (
    AppointmentNotFoundError,
    InvalidDateError,
    InvalidStatusTransitionError,
    SlotAlreadyBookedError,
    SlotNotInScheduleError,
)

from conftest import MONDAY, store_appointment


@pytest.fixture
def reschedule(appointment_repo, resolver, checker):
    return RescheduleAppointmentUseCase(appointment_repo, resolver, checker)


@pytest.fixture
def update_status(appointment_repo):
    return UpdateAppointmentStatusUseCase(appointment_repo)


def _move(appointment, time, patient_id="pat-1", date=MONDAY):
    return RescheduleAppointmentRequest(
        appointment_id=appointment.appointment_id.value, patient_id=patient_id, date=date, time=time
    )


async def test_reschedule_moves_slot_and_keeps_key(reschedule, appointment_repo, checker, monday_schedule):
    appointment = store_appointment(appointment_repo, time="09:00")

    moved = await reschedule.execute(_move(appointment, "09:30"))

    assert moved.time == "09:30"
    assert moved.appointment_key == appointment.appointment_key
    assert moved.status == AppointmentStatus.PENDING
    assert await checker.booked_times("doc-1", MONDAY) == {"09:30"}


async def test_reschedule_onto_own_slot_is_allowed(reschedule, appointment_repo, monday_schedule):
    appointment = store_appointment(appointment_repo, time="09:00")

    moved = await reschedule.execute(_move(appointment, "09:00"))

    assert moved.time == "09:00"


async def test_reschedule_onto_taken_slot_conflicts(reschedule, appointment_repo, monday_schedule):
    appointment = store_appointment(appointment_repo, time="09:00")
    store_appointment(appointment_repo, patient_id="pat-2", time="09:30")

    with pytest.raises(SlotAlreadyBookedError):
        await reschedule.execute(_move(appointment, "09:30"))
    assert appointment_repo.appointments[appointment.appointment_id.value].time == "09:00"


async def test_reschedule_outside_schedule(reschedule, appointment_repo, monday_schedule):
    appointment = store_appointment(appointment_repo, time="09:00")

    with pytest.raises(SlotNotInScheduleError):
        await reschedule.execute(_move(appointment, "10:00"))


async def test_reschedule_of_cancelled_appointment(reschedule, appointment_repo, monday_schedule):
    appointment = store_appointment(appointment_repo, time="09:00", status=AppointmentStatus.CANCELLED)

    with pytest.raises(InvalidStatusTransitionError):
        await reschedule.execute(_move(appointment, "09:30"))


async def test_reschedule_by_other_patient(reschedule, appointment_repo, monday_schedule):
    appointment = store_appointment(appointment_repo, time="09:00")

    with pytest.raises(AppointmentNotFoundError):
        await reschedule.execute(_move(appointment, "09:30", patient_id="pat-2"))


async def test_doctor_confirms_and_completes(update_status, appointment_repo):
    appointment = store_appointment(appointment_repo)
    appointment_id = appointment.appointment_id.value

    confirmed = await update_status.execute(
        UpdateAppointmentStatusRequest(appointment_id, AppointmentStatus.CONFIRMED, doctor_id="doc-1")
    )
    assert confirmed.status == AppointmentStatus.CONFIRMED

    completed = await update_status.execute(
        UpdateAppointmentStatusRequest(appointment_id, AppointmentStatus.COMPLETED)
    )
    assert completed.status == AppointmentStatus.COMPLETED
    assert appointment_repo.appointments[appointment_id].status == AppointmentStatus.COMPLETED


async def test_reject_releases_the_slot(update_status, appointment_repo, checker):
    appointment = store_appointment(appointment_repo)

    await update_status.execute(
        UpdateAppointmentStatusRequest(appointment.appointment_id.value, AppointmentStatus.REJECTED)
    )

    assert await checker.is_available("doc-1", MONDAY, "09:00")


async def test_status_change_by_wrong_doctor(update_status, appointment_repo):
    appointment = store_appointment(appointment_repo)

    with pytest.raises(AppointmentNotFoundError):
        await update_status.execute(
            UpdateAppointmentStatusRequest(
                appointment.appointment_id.value, AppointmentStatus.CONFIRMED, doctor_id="doc-2"
            )
        )


async def test_terminal_status_cannot_change(update_status, appointment_repo):
    appointment = store_appointment(appointment_repo, status=AppointmentStatus.COMPLETED)

    with pytest.raises(InvalidStatusTransitionError):
        await update_status.execute(
            UpdateAppointmentStatusRequest(appointment.appointment_id.value, AppointmentStatus.CONFIRMED)
        )


async def test_list_and_get(appointment_repo):
    early = store_appointment(appointment_repo, time="09:00")
    late = store_appointment(appointment_repo, time="09:30")
    store_appointment(appointment_repo, patient_id="pat-2", time="10:00")

    listed = await ListPatientAppointmentsUseCase(appointment_repo).execute("pat-1")
    assert [a.appointment_id for a in listed] == [late.appointment_id, early.appointment_id]

    get = GetAppointmentUseCase(appointment_repo)
    assert (await get.by_key(early.appointment_key.value)).appointment_id == early.appointment_id
    with pytest.raises(AppointmentNotFoundError):
        await get.execute(early.appointment_id.value, patient_id="pat-2")
    with pytest.raises(AppointmentNotFoundError):
        await get.by_key("not-a-key")


async def test_doctor_listing_filters_by_date_and_status(appointment_repo):
    pending = store_appointment(appointment_repo, patient_id="pat-1", time="09:30")
    store_appointment(appointment_repo, patient_id="pat-2", time="09:00", status=AppointmentStatus.CONFIRMED)
    store_appointment(appointment_repo, patient_id="pat-3", date="2024-06-04", time="09:00")
    store_appointment(appointment_repo, doctor_id="doc-2", time="09:30")
    list_for_doctor = ListDoctorAppointmentsUseCase(appointment_repo)

    everything = await list_for_doctor.execute("doc-1")
    assert [(a.date, a.time) for a in everything] == [
        (MONDAY, "09:00"),
        (MONDAY, "09:30"),
        ("2024-06-04", "09:00"),
    ]

    awaiting = await list_for_doctor.execute("doc-1", date=MONDAY, status=AppointmentStatus.PENDING)
    assert [a.appointment_id for a in awaiting] == [pending.appointment_id]

    with pytest.raises(InvalidDateError):
        await list_for_doctor.execute("doc-1", date="03/06/2024")


async def test_patient_listing_filters_by_status(appointment_repo):
    store_appointment(appointment_repo, time="09:00", status=AppointmentStatus.CANCELLED)
    kept = store_appointment(appointment_repo, time="09:30")

    listed = await ListPatientAppointmentsUseCase(appointment_repo).execute(
        "pat-1", date=MONDAY, status="pending"
    )

    assert [a.appointment_id for a in listed] == [kept.appointment_id]
