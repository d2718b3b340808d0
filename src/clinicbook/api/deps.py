"""FastAPI dependency providers."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ..adapters.db.mongo.repositories.appointment_repository import (
    MongoAppointmentRepository,
)
from ..adapters.db.mongo.repositories.schedule_repository import (
    MongoScheduleRepository,
)
from ..application.ports.repositories.appointment_repo import AppointmentRepository
from ..application.ports.repositories.schedule_repo import ScheduleRepository
from ..application.services.availability_checker import AvailabilityChecker
from ..application.services.schedule_resolver import ScheduleResolver
from ..application.use_cases.book_appointment import BookAppointmentUseCase
from ..application.use_cases.cancel_appointment import CancelAppointmentUseCase
from ..application.use_cases.get_available_slots import GetAvailableSlotsUseCase
from ..application.use_cases.list_appointments import (
    GetAppointmentUseCase,
    ListDoctorAppointmentsUseCase,
    ListPatientAppointmentsUseCase,
)
from ..application.use_cases.manage_schedule import (
    DeleteScheduleUseCase,
    ListSchedulesUseCase,
    SaveScheduleUseCase,
)
from ..application.use_cases.reschedule_appointment import RescheduleAppointmentUseCase
from ..application.use_cases.update_appointment_status import UpdateAppointmentStatusUseCase
from ..core.config import get_settings


@lru_cache()
def get_schedule_repository() -> ScheduleRepository:
    """Get schedule repository instance."""
    return MongoScheduleRepository()


@lru_cache()
def get_appointment_repository() -> AppointmentRepository:
    """Get appointment repository instance."""
    return MongoAppointmentRepository()


# Dependency annotations for FastAPI
ScheduleRepositoryDep = Annotated[ScheduleRepository, Depends(get_schedule_repository)]
AppointmentRepositoryDep = Annotated[AppointmentRepository, Depends(get_appointment_repository)]


def get_schedule_resolver(schedule_repo: ScheduleRepositoryDep) -> ScheduleResolver:
    return ScheduleResolver(schedule_repo)


def get_availability_checker(appointment_repo: AppointmentRepositoryDep) -> AvailabilityChecker:
    return AvailabilityChecker(appointment_repo)


ScheduleResolverDep = Annotated[ScheduleResolver, Depends(get_schedule_resolver)]
AvailabilityCheckerDep = Annotated[AvailabilityChecker, Depends(get_availability_checker)]


def get_available_slots_use_case(
    resolver: ScheduleResolverDep, checker: AvailabilityCheckerDep
) -> GetAvailableSlotsUseCase:
    return GetAvailableSlotsUseCase(resolver, checker)


def get_book_appointment_use_case(
    appointment_repo: AppointmentRepositoryDep,
    resolver: ScheduleResolverDep,
    checker: AvailabilityCheckerDep,
) -> BookAppointmentUseCase:
    return BookAppointmentUseCase(
        appointment_repo,
        resolver,
        checker,
        key_max_attempts=get_settings().booking.key_max_attempts,
    )


def get_reschedule_appointment_use_case(
    appointment_repo: AppointmentRepositoryDep,
    resolver: ScheduleResolverDep,
    checker: AvailabilityCheckerDep,
) -> RescheduleAppointmentUseCase:
    return RescheduleAppointmentUseCase(appointment_repo, resolver, checker)


def get_cancel_appointment_use_case(appointment_repo: AppointmentRepositoryDep) -> CancelAppointmentUseCase:
    return CancelAppointmentUseCase(appointment_repo)


def get_update_status_use_case(appointment_repo: AppointmentRepositoryDep) -> UpdateAppointmentStatusUseCase:
    return UpdateAppointmentStatusUseCase(appointment_repo)


def get_list_appointments_use_case(appointment_repo: AppointmentRepositoryDep) -> ListPatientAppointmentsUseCase:
    return ListPatientAppointmentsUseCase(appointment_repo)


def get_list_doctor_appointments_use_case(
    appointment_repo: AppointmentRepositoryDep,
) -> ListDoctorAppointmentsUseCase:
    return ListDoctorAppointmentsUseCase(appointment_repo)


def get_appointment_use_case(appointment_repo: AppointmentRepositoryDep) -> GetAppointmentUseCase:
    return GetAppointmentUseCase(appointment_repo)


def get_save_schedule_use_case(schedule_repo: ScheduleRepositoryDep) -> SaveScheduleUseCase:
    return SaveScheduleUseCase(schedule_repo)


def get_list_schedules_use_case(schedule_repo: ScheduleRepositoryDep) -> ListSchedulesUseCase:
    return ListSchedulesUseCase(schedule_repo)


def get_delete_schedule_use_case(schedule_repo: ScheduleRepositoryDep) -> DeleteScheduleUseCase:
    return DeleteScheduleUseCase(schedule_repo)


GetAvailableSlotsDep = Annotated[GetAvailableSlotsUseCase, Depends(get_available_slots_use_case)]
BookAppointmentDep = Annotated[BookAppointmentUseCase, Depends(get_book_appointment_use_case)]
RescheduleAppointmentDep = Annotated[RescheduleAppointmentUseCase, Depends(get_reschedule_appointment_use_case)]
CancelAppointmentDep = Annotated[CancelAppointmentUseCase, Depends(get_cancel_appointment_use_case)]
UpdateAppointmentStatusDep = Annotated[UpdateAppointmentStatusUseCase, Depends(get_update_status_use_case)]
ListAppointmentsDep = Annotated[ListPatientAppointmentsUseCase, Depends(get_list_appointments_use_case)]
ListDoctorAppointmentsDep = Annotated[
    ListDoctorAppointmentsUseCase, Depends(get_list_doctor_appointments_use_case)
]
GetAppointmentDep = Annotated[GetAppointmentUseCase, Depends(get_appointment_use_case)]
SaveScheduleDep = Annotated[SaveScheduleUseCase, Depends(get_save_schedule_use_case)]
ListSchedulesDep = Annotated[ListSchedulesUseCase, Depends(get_list_schedules_use_case)]
DeleteScheduleDep = Annotated[DeleteScheduleUseCase, Depends(get_delete_schedule_use_case)]
