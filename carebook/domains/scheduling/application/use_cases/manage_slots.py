"""
Slot Administration Use Cases

Single-slot lookup, administrative holds and deletion of unused slots.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carebook.core.domain import ConflictException, EntityNotFoundException
from carebook.database.transaction import atomic
from carebook.domains.scheduling.application.dto import SlotView
from carebook.domains.scheduling.application.ports import ISlotRepository
from carebook.domains.scheduling.application.services.slot_allocator import SlotAllocator

logger = logging.getLogger(__name__)


class GetSlotUseCase:
    """Fetch one slot by id."""

    def __init__(self, slot_repository: ISlotRepository):
        self.slot_repo = slot_repository

    async def execute(self, slot_id: UUID) -> SlotView:
        slot = await self.slot_repo.find_by_id(slot_id)
        if slot is None:
            raise EntityNotFoundException(entity_type="Slot", entity_id=slot_id)
        return SlotView.from_entity(slot)


class BlockSlotUseCase:
    """Put an Available slot on hold so it cannot be booked."""

    def __init__(self, session: AsyncSession, slot_allocator: SlotAllocator):
        self.session = session
        self.slot_allocator = slot_allocator

    async def execute(self, slot_id: UUID) -> SlotView:
        async with atomic(self.session):
            slot = await self.slot_allocator.block_slot(slot_id)
        return SlotView.from_entity(slot)


class UnblockSlotUseCase:
    """Return a Blocked slot to Available."""

    def __init__(self, session: AsyncSession, slot_allocator: SlotAllocator):
        self.session = session
        self.slot_allocator = slot_allocator

    async def execute(self, slot_id: UUID) -> SlotView:
        async with atomic(self.session):
            slot = await self.slot_allocator.unblock_slot(slot_id)
        return SlotView.from_entity(slot)


class DeleteSlotUseCase:
    """
    Remove a slot from the calendar.

    Only Available slots may be deleted. Booked or Blocked slots raise a
    conflict; the row lock makes a concurrent claim fail with contention
    instead of racing the delete.
    """

    def __init__(self, session: AsyncSession, slot_repository: ISlotRepository):
        self.session = session
        self.slot_repo = slot_repository

    async def execute(self, slot_id: UUID) -> None:
        async with atomic(self.session):
            slot = await self.slot_repo.lock_for_update(slot_id)
            if slot is None:
                raise EntityNotFoundException(entity_type="Slot", entity_id=slot_id)
            if not slot.is_available() or not await self.slot_repo.delete_if_available(slot_id):
                raise ConflictException(
                    f"Slot is {slot.status.value} and cannot be deleted",
                    details={"slot_id": str(slot_id), "current_status": slot.status.value},
                )

        logger.info(f"Slot {slot_id} deleted")
