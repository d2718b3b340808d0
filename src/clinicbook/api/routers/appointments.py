"""
Appointment booking endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request, status

from ...application.dto import booking_dto
from ...core.utils.datetime_utils import format_booking_date, parse_booking_date
from ...core.utils.string_utils import validate_party_id
from ...domain.enums.appointment import AppointmentStatus
from ...domain.errors import ValidationError
from ...domain.value_objects.clock_time import ClockTime
from ..deps import (
    AvailabilityCheckerDep,
    BookAppointmentDep,
    CancelAppointmentDep,
    GetAppointmentDep,
    ListAppointmentsDep,
    ListDoctorAppointmentsDep,
    RescheduleAppointmentDep,
    UpdateAppointmentStatusDep,
)
from ..schemas.appointments import (
    AppointmentListResponse,
    AppointmentResponse,
    AvailabilityResponse,
    BookAppointmentRequest,
    BookedSlotsResponse,
    CancelAppointmentRequest,
    RescheduleAppointmentRequest,
    UpdateAppointmentStatusRequest,
)
from ..schemas.common import ApiResponse, ErrorResponse
from ..utils.responses import ok

router = APIRouter(prefix="/appointments", tags=["Appointments"])

CONFLICT_RESPONSES = {
    409: {"model": ErrorResponse, "description": "Slot already booked"},
    422: {"model": ErrorResponse, "description": "Invalid date, time or slot not in schedule"},
}


@router.post(
    "",
    response_model=ApiResponse[AppointmentResponse],
    status_code=status.HTTP_201_CREATED,
    responses=CONFLICT_RESPONSES,
    summary="Book a slot",
)
async def book_appointment(
    request: Request,
    payload: BookAppointmentRequest,
    use_case: BookAppointmentDep,
):
    """Create a pending appointment; exactly one of two concurrent bookings of a slot wins."""
    appointment = await use_case.execute(
        booking_dto.BookAppointmentRequest(**payload.model_dump())
    )
    return ok(request, data=AppointmentResponse.from_entity(appointment), message="Appointment booked")


@router.get(
    "",
    response_model=ApiResponse[AppointmentListResponse],
    responses={422: {"model": ErrorResponse, "description": "Neither or both of patient_id and doctor_id"}},
    summary="List a patient's or a doctor's appointments",
)
async def list_appointments(
    request: Request,
    patient_use_case: ListAppointmentsDep,
    doctor_use_case: ListDoctorAppointmentsDep,
    patient_id: Optional[str] = Query(None, description="Patient ID"),
    doctor_id: Optional[str] = Query(None, description="Doctor ID"),
    date: Optional[str] = Query(None, description="Only this date, YYYY-MM-DD"),
    status_filter: Optional[AppointmentStatus] = Query(None, alias="status", description="Only this status"),
):
    """Exactly one of ``patient_id`` (newest first) or ``doctor_id`` (earliest first)."""
    if (patient_id is None) == (doctor_id is None):
        raise ValidationError(
            "Provide exactly one of patient_id or doctor_id",
            "INVALID_INPUT",
            {"patient_id": patient_id, "doctor_id": doctor_id},
        )
    if doctor_id is not None:
        appointments = await doctor_use_case.execute(doctor_id, date=date, status=status_filter)
    else:
        appointments = await patient_use_case.execute(patient_id, date=date, status=status_filter)
    data = AppointmentListResponse(
        patient_id=patient_id,
        doctor_id=doctor_id,
        date=date,
        status=status_filter,
        appointments=[AppointmentResponse.from_entity(a) for a in appointments],
        total=len(appointments),
    )
    return ok(request, data=data, message="Appointments loaded")


@router.get(
    "/booked-slots",
    response_model=ApiResponse[BookedSlotsResponse],
    summary="Times already held on a doctor's date",
)
async def get_booked_slots(
    request: Request,
    checker: AvailabilityCheckerDep,
    doctor_id: str = Query(..., description="Doctor ID"),
    date: str = Query(..., description="YYYY-MM-DD"),
):
    doctor_id = validate_party_id("doctor_id", doctor_id)
    date = format_booking_date(parse_booking_date(date))
    booked = await checker.booked_times(doctor_id, date)
    data = BookedSlotsResponse(doctor_id=doctor_id, date=date, booked_times=sorted(booked))
    return ok(request, data=data, message="Booked slots loaded")


@router.get(
    "/availability",
    response_model=ApiResponse[AvailabilityResponse],
    summary="Whether one slot is currently free",
)
async def check_availability(
    request: Request,
    checker: AvailabilityCheckerDep,
    doctor_id: str = Query(..., description="Doctor ID"),
    date: str = Query(..., description="YYYY-MM-DD"),
    time: str = Query(..., description="HH:MM"),
):
    """Advisory answer; a later booking can still lose the slot."""
    doctor_id = validate_party_id("doctor_id", doctor_id)
    date = format_booking_date(parse_booking_date(date))
    time = ClockTime.parse(time).value
    available = await checker.is_available(doctor_id, date, time)
    data = AvailabilityResponse(doctor_id=doctor_id, date=date, time=time, available=available)
    return ok(request, data=data, message="Available" if available else "Slot already booked")


@router.get(
    "/by-key/{appointment_key}",
    response_model=ApiResponse[AppointmentResponse],
    summary="Find an appointment by its 6-digit key",
)
async def get_appointment_by_key(request: Request, appointment_key: str, use_case: GetAppointmentDep):
    appointment = await use_case.by_key(appointment_key)
    return ok(request, data=AppointmentResponse.from_entity(appointment), message="Appointment loaded")


@router.get(
    "/{appointment_id}",
    response_model=ApiResponse[AppointmentResponse],
    summary="Fetch one appointment",
)
async def get_appointment(
    request: Request,
    appointment_id: str,
    use_case: GetAppointmentDep,
    patient_id: Optional[str] = Query(None, description="When given, the appointment must belong to this patient"),
):
    appointment = await use_case.execute(appointment_id, patient_id=patient_id)
    return ok(request, data=AppointmentResponse.from_entity(appointment), message="Appointment loaded")


@router.post(
    "/{appointment_id}/cancel",
    response_model=ApiResponse[AppointmentResponse],
    summary="Cancel an appointment and free its slot",
)
async def cancel_appointment(
    request: Request,
    appointment_id: str,
    payload: CancelAppointmentRequest,
    use_case: CancelAppointmentDep,
):
    appointment = await use_case.execute(
        booking_dto.CancelAppointmentRequest(appointment_id=appointment_id, patient_id=payload.patient_id)
    )
    return ok(request, data=AppointmentResponse.from_entity(appointment), message="Appointment cancelled")


@router.post(
    "/{appointment_id}/reschedule",
    response_model=ApiResponse[AppointmentResponse],
    responses=CONFLICT_RESPONSES,
    summary="Move an appointment to another slot",
)
async def reschedule_appointment(
    request: Request,
    appointment_id: str,
    payload: RescheduleAppointmentRequest,
    use_case: RescheduleAppointmentDep,
):
    appointment = await use_case.execute(
        booking_dto.RescheduleAppointmentRequest(
            appointment_id=appointment_id,
            patient_id=payload.patient_id,
            date=payload.date,
            time=payload.time,
        )
    )
    return ok(request, data=AppointmentResponse.from_entity(appointment), message="Appointment rescheduled")


@router.patch(
    "/{appointment_id}/status",
    response_model=ApiResponse[AppointmentResponse],
    summary="Doctor-side confirm, reject or complete",
)
async def update_appointment_status(
    request: Request,
    appointment_id: str,
    payload: UpdateAppointmentStatusRequest,
    use_case: UpdateAppointmentStatusDep,
):
    appointment = await use_case.execute(
        booking_dto.UpdateAppointmentStatusRequest(
            appointment_id=appointment_id,
            status=payload.status,
            doctor_id=payload.doctor_id,
        )
    )
    return ok(
        request,
        data=AppointmentResponse.from_entity(appointment),
        message=f"Appointment {appointment.status.value}",
    )
