from fastapi import APIRouter, Query, Request, status

from ...application.dto.booking_dto import DayScheduleInput
from ...application.dto.booking_dto import SaveScheduleRequest as SaveScheduleCommand
from ...core.utils.datetime_utils import format_booking_date
from ..deps import (
    DeleteScheduleDep,
    GetAvailableSlotsDep,
    ListSchedulesDep,
    SaveScheduleDep,
    ScheduleResolverDep,
)
from ..schemas.common import ApiResponse
from ..schemas.schedules import (
    AvailableSlotsResponse,
    DayScheduleResponse,
    ResolvedScheduleResponse,
    SaveScheduleRequest,
    ScheduleResponse,
    SlotSchema,
)
from ..utils.responses import ok

router = APIRouter(prefix="/doctors", tags=["Schedules"])

DATE_QUERY = Query(..., description="Calendar date, YYYY-MM-DD", examples=["2024-06-03"])


@router.get(
    "/{doctor_id}/slots",
    response_model=ApiResponse[AvailableSlotsResponse],
    summary="Bookable slots of a doctor on a date",
    description=(
        "Resolves the doctor's schedule for the date (week-specific, then general, "
        "then any schedule, then the clinic default) and lists morning and evening "
        "slots. The `available` flag is advisory; booking re-checks the slot."
    ),
)
async def get_available_slots(
    request: Request,
    doctor_id: str,
    use_case: GetAvailableSlotsDep,
    date: str = DATE_QUERY,
):
    result = await use_case.execute(doctor_id, date)
    data = AvailableSlotsResponse(
        doctor_id=result.doctor_id,
        date=result.date,
        day_of_week=result.day_of_week,
        provenance=result.provenance,
        schedule_id=result.schedule_id,
        within_range=result.within_range,
        is_off_day=result.is_off_day,
        slot_duration=result.slot_duration,
        morning=[SlotSchema(time=s.time, available=s.available) for s in result.morning],
        evening=[SlotSchema(time=s.time, available=s.available) for s in result.evening],
    )
    return ok(request, data=data, message="Slots loaded")


@router.get(
    "/{doctor_id}/schedule",
    response_model=ApiResponse[ResolvedScheduleResponse],
    summary="Effective day schedule of a doctor on a date",
)
async def get_resolved_schedule(
    request: Request,
    doctor_id: str,
    resolver: ScheduleResolverDep,
    date: str = DATE_QUERY,
):
    resolved = await resolver.resolve(doctor_id, date)
    morning, evening = resolved.slots()
    data = ResolvedScheduleResponse(
        doctor_id=resolved.doctor_id,
        date=format_booking_date(resolved.date),
        day_of_week=resolved.weekday.value,
        provenance=resolved.provenance.value,
        schedule_id=resolved.schedule_id,
        within_range=resolved.within_range,
        day=DayScheduleResponse.from_entity(resolved.day) if resolved.day else None,
        morning_slots=[s.value for s in morning],
        evening_slots=[s.value for s in evening],
    )
    return ok(request, data=data, message="Schedule resolved")


@router.get(
    "/{doctor_id}/schedules",
    response_model=ApiResponse[list[ScheduleResponse]],
    summary="List a doctor's schedule documents",
)
async def list_schedules(request: Request, doctor_id: str, use_case: ListSchedulesDep):
    schedules = await use_case.execute(doctor_id)
    return ok(
        request,
        data=[ScheduleResponse.from_entity(s) for s in schedules],
        message=f"{len(schedules)} schedule(s)",
    )


@router.put(
    "/{doctor_id}/schedules",
    response_model=ApiResponse[ScheduleResponse],
    status_code=status.HTTP_200_OK,
    summary="Create or replace a schedule",
    description=(
        "Without week bounds the schedule becomes the doctor's general weekly "
        "schedule; with both bounds it overrides the general one for those dates. "
        "A schedule with the same bounds as an existing one replaces it."
    ),
)
async def save_schedule(
    request: Request,
    doctor_id: str,
    payload: SaveScheduleRequest,
    use_case: SaveScheduleDep,
):
    command = SaveScheduleCommand(
        doctor_id=doctor_id,
        week_start=payload.week_start,
        week_end=payload.week_end,
        days=[DayScheduleInput(**day.model_dump()) for day in payload.days],
    )
    schedule = await use_case.execute(command)
    return ok(request, data=ScheduleResponse.from_entity(schedule), message="Schedule saved")


@router.delete(
    "/{doctor_id}/schedules/{schedule_id}",
    response_model=ApiResponse[dict],
    summary="Delete a schedule",
)
async def delete_schedule(
    request: Request,
    doctor_id: str,
    schedule_id: str,
    use_case: DeleteScheduleDep,
):
    await use_case.execute(doctor_id, schedule_id)
    return ok(request, data={"schedule_id": schedule_id, "deleted": True}, message="Schedule deleted")
