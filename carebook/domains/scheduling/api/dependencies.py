"""
Scheduling API Dependencies

FastAPI dependencies for the scheduling domain. One database session per
request is shared by every object built for that request.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from carebook.core.container import get_container
from carebook.database.async_db import get_async_db
from carebook.domains.scheduling.application.services.booking_lifecycle import BookingLifecycleManager
from carebook.domains.scheduling.application.use_cases import (
    BlockSlotUseCase,
    CreateSlotUseCase,
    DeleteSlotUseCase,
    GetAvailableSlotsUseCase,
    GetBookingByIdUseCase,
    GetPatientAppointmentsUseCase,
    GetResourceScheduleUseCase,
    GetSlotUseCase,
    ListCliniciansUseCase,
    UnblockSlotUseCase,
)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_async_db)]


def get_booking_lifecycle_manager(db: DbSession) -> BookingLifecycleManager:
    """Get BookingLifecycleManager instance with database session."""
    return get_container().scheduling.create_booking_lifecycle_manager(db)


def get_available_slots_use_case(db: DbSession) -> GetAvailableSlotsUseCase:
    """Get GetAvailableSlotsUseCase instance with database session."""
    return get_container().scheduling.create_get_available_slots_use_case(db)


def get_patient_appointments_use_case(db: DbSession) -> GetPatientAppointmentsUseCase:
    """Get GetPatientAppointmentsUseCase instance with database session."""
    return get_container().scheduling.create_get_patient_appointments_use_case(db)


def get_booking_use_case(db: DbSession) -> GetBookingByIdUseCase:
    """Get GetBookingByIdUseCase instance with database session."""
    return get_container().scheduling.create_get_booking_use_case(db)


def get_resource_schedule_use_case(db: DbSession) -> GetResourceScheduleUseCase:
    """Get GetResourceScheduleUseCase instance with database session."""
    return get_container().scheduling.create_get_resource_schedule_use_case(db)


def get_create_slot_use_case(db: DbSession) -> CreateSlotUseCase:
    """Get CreateSlotUseCase instance with database session."""
    return get_container().scheduling.create_create_slot_use_case(db)


def get_slot_use_case(db: DbSession) -> GetSlotUseCase:
    return get_container().scheduling.create_get_slot_use_case(db)


def get_block_slot_use_case(db: DbSession) -> BlockSlotUseCase:
    return get_container().scheduling.create_block_slot_use_case(db)


def get_unblock_slot_use_case(db: DbSession) -> UnblockSlotUseCase:
    return get_container().scheduling.create_unblock_slot_use_case(db)


def get_delete_slot_use_case(db: DbSession) -> DeleteSlotUseCase:
    return get_container().scheduling.create_delete_slot_use_case(db)


def get_list_clinicians_use_case(db: DbSession) -> ListCliniciansUseCase:
    return get_container().scheduling.create_list_clinicians_use_case(db)


__all__ = [
    "DbSession",
    "get_booking_lifecycle_manager",
    "get_available_slots_use_case",
    "get_patient_appointments_use_case",
    "get_booking_use_case",
    "get_resource_schedule_use_case",
    "get_create_slot_use_case",
    "get_slot_use_case",
    "get_block_slot_use_case",
    "get_unblock_slot_use_case",
    "get_delete_slot_use_case",
    "get_list_clinicians_use_case",
]
