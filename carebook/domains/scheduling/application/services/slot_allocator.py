"""
Slot Allocator

Sole writer of slot status. Every transition takes an exclusive,
non-blocking row lock on the slot and then applies a conditional update, so
exactly one of several concurrent claimers can win a slot.
"""

import logging
from uuid import UUID

from carebook.core.domain import (
    EntityNotFoundException,
    InvalidOperationException,
    SlotContentionException,
    SlotUnavailableException,
)
from carebook.domains.scheduling.application.dto import ClaimedSlot
from carebook.domains.scheduling.application.ports import ISlotRepository
from carebook.domains.scheduling.domain.entities import Slot
from carebook.domains.scheduling.domain.value_objects import SlotStatus

logger = logging.getLogger(__name__)


class SlotAllocator:
    """
    Claims and releases slots inside the caller's transaction.

    The allocator never commits. The surrounding unit of work (the booking
    lifecycle manager or a slot admin use case) owns commit and rollback.
    No automatic retry: contention is reported to the caller.
    """

    def __init__(self, slot_repository: ISlotRepository):
        self.slot_repo = slot_repository

    async def _lock(self, slot_id: UUID) -> Slot:
        slot = await self.slot_repo.lock_for_update(slot_id)
        if slot is None:
            raise EntityNotFoundException(entity_type="Slot", entity_id=slot_id)
        return slot

    async def claim_slot(self, slot_id: UUID) -> ClaimedSlot:
        """
        Transition a slot from Available to Booked.

        Args:
            slot_id: Slot to claim

        Returns:
            Snapshot of the claimed slot

        Raises:
            SlotContentionException: row lock held elsewhere, or the conditional update lost
            EntityNotFoundException: slot does not exist
            SlotUnavailableException: slot is Booked or Blocked
        """
        slot = await self._lock(slot_id)

        if not slot.is_available():
            logger.info(f"Claim rejected for slot {slot_id}: status is {slot.status.value}")
            raise SlotUnavailableException(slot_id=slot_id, current_status=slot.status.value)

        if not await self.slot_repo.mark_booked_if_available(slot_id):
            logger.warning(f"Conditional claim update matched no row for slot {slot_id}")
            raise SlotContentionException(slot_id)

        logger.info(f"Slot {slot_id} claimed for resource {slot.resource_id}")
        return ClaimedSlot(
            slot_id=slot.id,
            resource_id=slot.resource_id,
            start_time=slot.start_time,
            end_time=slot.end_time,
        )

    async def release_slot(self, slot_id: UUID | None) -> None:
        """
        Return a slot to Available.

        Idempotent: releasing an Available slot, or one that no longer exists,
        changes nothing.
        """
        if slot_id is None:
            return
        released = await self.slot_repo.mark_available(slot_id)
        if released:
            logger.info(f"Slot {slot_id} released")
        else:
            logger.debug(f"Release of slot {slot_id} was a no-op")

    async def block_slot(self, slot_id: UUID) -> Slot:
        """Place an administrative hold on an Available slot."""
        slot = await self._lock(slot_id)

        if not slot.is_available():
            raise SlotUnavailableException(
                slot_id=slot_id,
                current_status=slot.status.value,
                message=f"Slot is {slot.status.value} and cannot be blocked",
            )

        if not await self.slot_repo.mark_blocked_if_available(slot_id):
            raise SlotContentionException(slot_id)

        logger.info(f"Slot {slot_id} blocked")
        return await self.slot_repo.find_by_id(slot_id)

    async def unblock_slot(self, slot_id: UUID) -> Slot:
        """Lift an administrative hold. Only Blocked slots qualify."""
        slot = await self._lock(slot_id)

        if slot.status != SlotStatus.BLOCKED:
            raise InvalidOperationException(
                operation="unblock",
                current_state=slot.status.value,
                message=f"Slot is {slot.status.value} and is not blocked",
            )

        await self.slot_repo.mark_available(slot_id)
        logger.info(f"Slot {slot_id} unblocked")
        return await self.slot_repo.find_by_id(slot_id)
