"""Get Available Slots use case: resolved slots annotated with advisory availability."""

import logging

from ...core.utils.datetime_utils import format_booking_date, parse_booking_date
from ...core.utils.string_utils import validate_party_id
from ..dto.booking_dto import AvailableSlotsResponse, SlotView
from ..services.availability_checker import AvailabilityChecker
from ..services.schedule_resolver import ScheduleResolver

logger = logging.getLogger(__name__)


class GetAvailableSlotsUseCase:
    """Use case for listing a doctor's bookable slots on a date."""

    def __init__(self, resolver: ScheduleResolver, availability_checker: AvailabilityChecker):
        self._resolver = resolver
        self._availability_checker = availability_checker

    async def execute(self, doctor_id: str, date: str) -> AvailableSlotsResponse:
        """Execute the get available slots use case.

        The ``available`` flags come from a single booked-times lookup and are
        only a hint; booking re-checks the slot.
        """
        doctor_id = validate_party_id("doctor_id", doctor_id)
        date_str = format_booking_date(parse_booking_date(date))

        resolved = await self._resolver.resolve(doctor_id, date_str)
        morning, evening = resolved.slots()

        booked = set()
        if morning or evening:
            booked = await self._availability_checker.booked_times(doctor_id, date_str)

        return AvailableSlotsResponse(
            doctor_id=doctor_id,
            date=date_str,
            day_of_week=resolved.weekday.value,
            provenance=resolved.provenance.value,
            schedule_id=resolved.schedule_id,
            within_range=resolved.within_range,
            is_off_day=resolved.is_off_day,
            slot_duration=resolved.day.slot_duration if resolved.day else None,
            morning=[SlotView(time=s.value, available=s.value not in booked) for s in morning],
            evening=[SlotView(time=s.value, available=s.value not in booked) for s in evening],
        )
