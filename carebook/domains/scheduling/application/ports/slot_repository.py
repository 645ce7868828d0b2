"""
Slot Repository Port

Interface for slot storage. Status-changing methods are conditional writes
used only by the SlotAllocator.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from carebook.domains.scheduling.domain.entities import Slot


@runtime_checkable
class ISlotRepository(Protocol):
    """
    Slot repository interface.

    All methods run inside the caller's transaction.
    """

    async def find_by_id(self, slot_id: UUID) -> Slot | None:
        """Plain read, no lock."""
        ...

    async def find_by_ids(self, slot_ids: list[UUID]) -> dict[UUID, Slot]:
        ...

    async def lock_for_update(self, slot_id: UUID) -> Slot | None:
        """
        Take an exclusive, non-blocking row lock on the slot.

        Returns:
            The locked slot, or None if it does not exist

        Raises:
            SlotContentionException: another transaction holds the lock
        """
        ...

    async def mark_booked_if_available(self, slot_id: UUID) -> bool:
        """Available -> Booked. Returns False when no row matched."""
        ...

    async def mark_blocked_if_available(self, slot_id: UUID) -> bool:
        """Available -> Blocked. Returns False when no row matched."""
        ...

    async def mark_available(self, slot_id: UUID) -> bool:
        """Any non-Available status -> Available. Returns False when no row matched."""
        ...

    async def find_by_resource(
        self,
        resource_id: UUID,
        range_start: datetime,
        range_end: datetime,
        available_only: bool = False,
    ) -> list[Slot]:
        """
        Slots of a resource starting within [range_start, range_end), ordered by start.

        Args:
            resource_id: Clinician owning the slots
            range_start: Inclusive lower bound on start_time
            range_end: Exclusive upper bound on start_time
            available_only: Restrict to Available slots
        """
        ...

    async def has_overlap(self, resource_id: UUID, start_time: datetime, end_time: datetime) -> bool:
        """Check whether any slot of the resource intersects [start_time, end_time)."""
        ...

    async def add(self, slot: Slot) -> Slot:
        ...

    async def delete_if_available(self, slot_id: UUID) -> bool:
        """Delete the slot only while it is Available."""
        ...
