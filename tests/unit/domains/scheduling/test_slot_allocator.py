"""
Unit tests for SlotAllocator.

Runs against the in-memory slot repository, which emulates NOWAIT row locks
per session.
"""

from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from carebook.core.domain import (
    EntityNotFoundException,
    InvalidOperationException,
    SlotContentionException,
    SlotUnavailableException,
)
from carebook.domains.scheduling.application.ports import ISlotRepository
from carebook.domains.scheduling.application.services import SlotAllocator
from carebook.domains.scheduling.domain.value_objects import SlotStatus
from tests.utils import JAN_15_2024, InMemorySlotRepository, create_slot, make_session


@pytest.mark.unit
@pytest.mark.asyncio
async def test_claim_available_slot(store, slot, slot_allocator):
    """Claiming an Available slot books it."""
    # Act
    claimed = await slot_allocator.claim_slot(slot.id)

    # Assert
    assert claimed.slot_id == slot.id
    assert claimed.resource_id == slot.resource_id
    assert claimed.start_time == slot.start_time
    assert store.slot_status(slot.id) == SlotStatus.BOOKED
    assert store.slots[slot.id].version == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_claim_missing_slot(slot_allocator):
    with pytest.raises(EntityNotFoundException) as exc_info:
        await slot_allocator.claim_slot(uuid4())
    assert exc_info.value.entity_type == "Slot"


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("status", [SlotStatus.BOOKED, SlotStatus.BLOCKED])
async def test_claim_unavailable_slot(store, clinician, slot_allocator, status):
    """Booked and Blocked slots are rejected without changes."""
    # Arrange
    taken = create_slot(clinician.id, JAN_15_2024 + timedelta(hours=2), status=status)
    store.add_slots(taken)

    # Act
    with pytest.raises(SlotUnavailableException) as exc_info:
        await slot_allocator.claim_slot(taken.id)

    # Assert
    assert exc_info.value.code == "SLOT_UNAVAILABLE"
    assert exc_info.value.current_status == status.value
    assert store.slot_status(taken.id) == status


@pytest.mark.unit
@pytest.mark.asyncio
async def test_claim_fails_fast_when_row_is_locked(store, slot, slot_allocator):
    """A second session asking for a held row lock gets contention immediately."""
    # Arrange
    other_session = make_session(store)
    await InMemorySlotRepository(store, other_session).lock_for_update(slot.id)

    # Act
    with pytest.raises(SlotContentionException):
        await slot_allocator.claim_slot(slot.id)

    # Assert
    assert store.slot_status(slot.id) == SlotStatus.AVAILABLE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_claim_lost_conditional_update_is_contention(slot):
    """Lock succeeded but the conditional update matched no row."""
    # Arrange
    repo = AsyncMock(spec=ISlotRepository)
    repo.lock_for_update.return_value = slot
    repo.mark_booked_if_available.return_value = False
    allocator = SlotAllocator(repo)

    # Act & Assert
    with pytest.raises(SlotContentionException):
        await allocator.claim_slot(slot.id)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_release_is_idempotent(store, slot, slot_allocator):
    # Arrange
    await slot_allocator.claim_slot(slot.id)

    # Act
    await slot_allocator.release_slot(slot.id)
    await slot_allocator.release_slot(slot.id)
    await slot_allocator.release_slot(None)

    # Assert
    assert store.slot_status(slot.id) == SlotStatus.AVAILABLE
    assert store.slots[slot.id].version == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_block_and_unblock(store, slot, slot_allocator):
    blocked = await slot_allocator.block_slot(slot.id)
    assert blocked.status == SlotStatus.BLOCKED

    unblocked = await slot_allocator.unblock_slot(slot.id)
    assert unblocked.status == SlotStatus.AVAILABLE
    assert store.slot_status(slot.id) == SlotStatus.AVAILABLE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_block_booked_slot_is_rejected(store, slot, slot_allocator):
    await slot_allocator.claim_slot(slot.id)

    with pytest.raises(SlotUnavailableException) as exc_info:
        await slot_allocator.block_slot(slot.id)

    assert exc_info.value.message == "Slot is Booked and cannot be blocked"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unblock_requires_blocked_slot(slot, slot_allocator):
    with pytest.raises(InvalidOperationException) as exc_info:
        await slot_allocator.unblock_slot(slot.id)

    assert exc_info.value.current_state == "Available"
