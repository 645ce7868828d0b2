"""
Scheduling Domain Container.

Single Responsibility: Wire all scheduling domain dependencies for a session.
"""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from carebook.domains.scheduling.application.services.booking_lifecycle import BookingLifecycleManager
from carebook.domains.scheduling.application.services.slot_allocator import SlotAllocator
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
from carebook.domains.scheduling.infrastructure.repositories import (
    SQLAlchemyBookingRepository,
    SQLAlchemySlotRepository,
    SQLAlchemyUserRepository,
)

if TYPE_CHECKING:
    from carebook.core.container.base import BaseContainer

logger = logging.getLogger(__name__)


class SchedulingContainer:
    """
    Scheduling domain container.

    Single Responsibility: Create scheduling repositories, services and use cases.
    Every object created for one ``db`` session shares that session.
    """

    def __init__(self, base: "BaseContainer"):
        """
        Initialize scheduling container.

        Args:
            base: BaseContainer with shared singletons
        """
        self._base = base

    # ==================== REPOSITORIES ====================

    def create_slot_repository(self, db: AsyncSession) -> SQLAlchemySlotRepository:
        """Create Slot Repository."""
        return SQLAlchemySlotRepository(session=db)

    def create_booking_repository(self, db: AsyncSession) -> SQLAlchemyBookingRepository:
        """Create Booking Repository."""
        return SQLAlchemyBookingRepository(session=db)

    def create_user_repository(self, db: AsyncSession) -> SQLAlchemyUserRepository:
        """Create User Repository."""
        return SQLAlchemyUserRepository(session=db)

    # ==================== SERVICES ====================

    def create_slot_allocator(self, db: AsyncSession) -> SlotAllocator:
        """Create SlotAllocator bound to the session's transaction."""
        return SlotAllocator(slot_repository=self.create_slot_repository(db))

    def create_booking_lifecycle_manager(self, db: AsyncSession) -> BookingLifecycleManager:
        """Create BookingLifecycleManager with dependencies."""
        slot_repository = self.create_slot_repository(db)
        return BookingLifecycleManager(
            session=db,
            booking_repository=self.create_booking_repository(db),
            slot_repository=slot_repository,
            user_repository=self.create_user_repository(db),
            slot_allocator=SlotAllocator(slot_repository=slot_repository),
            notification_publisher=self._base.get_notification_publisher(),
        )

    # ==================== USE CASES ====================

    def create_get_available_slots_use_case(self, db: AsyncSession) -> GetAvailableSlotsUseCase:
        return GetAvailableSlotsUseCase(slot_repository=self.create_slot_repository(db))

    def create_get_patient_appointments_use_case(self, db: AsyncSession) -> GetPatientAppointmentsUseCase:
        return GetPatientAppointmentsUseCase(
            booking_repository=self.create_booking_repository(db),
            slot_repository=self.create_slot_repository(db),
            user_repository=self.create_user_repository(db),
        )

    def create_get_booking_use_case(self, db: AsyncSession) -> GetBookingByIdUseCase:
        return GetBookingByIdUseCase(
            booking_repository=self.create_booking_repository(db),
            slot_repository=self.create_slot_repository(db),
            user_repository=self.create_user_repository(db),
        )

    def create_get_resource_schedule_use_case(self, db: AsyncSession) -> GetResourceScheduleUseCase:
        return GetResourceScheduleUseCase(
            booking_repository=self.create_booking_repository(db),
            slot_repository=self.create_slot_repository(db),
            user_repository=self.create_user_repository(db),
        )

    def create_create_slot_use_case(self, db: AsyncSession) -> CreateSlotUseCase:
        return CreateSlotUseCase(
            session=db,
            slot_repository=self.create_slot_repository(db),
            user_repository=self.create_user_repository(db),
        )

    def create_get_slot_use_case(self, db: AsyncSession) -> GetSlotUseCase:
        return GetSlotUseCase(slot_repository=self.create_slot_repository(db))

    def create_block_slot_use_case(self, db: AsyncSession) -> BlockSlotUseCase:
        return BlockSlotUseCase(session=db, slot_allocator=self.create_slot_allocator(db))

    def create_unblock_slot_use_case(self, db: AsyncSession) -> UnblockSlotUseCase:
        return UnblockSlotUseCase(session=db, slot_allocator=self.create_slot_allocator(db))

    def create_delete_slot_use_case(self, db: AsyncSession) -> DeleteSlotUseCase:
        return DeleteSlotUseCase(session=db, slot_repository=self.create_slot_repository(db))

    def create_list_clinicians_use_case(self, db: AsyncSession) -> ListCliniciansUseCase:
        return ListCliniciansUseCase(user_repository=self.create_user_repository(db))
