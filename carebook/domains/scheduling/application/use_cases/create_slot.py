"""
Create Slot Use Case

Publishes a new Available slot on a clinician's calendar.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carebook.core.domain import ConflictException, EntityNotFoundException
from carebook.database.transaction import atomic
from carebook.domains.scheduling.application.dto import SlotView
from carebook.domains.scheduling.application.ports import ISlotRepository, IUserRepository
from carebook.domains.scheduling.domain.entities import Slot

logger = logging.getLogger(__name__)


@dataclass
class CreateSlotRequest:
    """Request for creating a slot."""

    resource_id: UUID
    start_time: datetime
    end_time: datetime


class CreateSlotUseCase:
    """
    Use case for creating slots.

    Validates the interval, checks the resource is a clinician and refuses
    intervals overlapping the resource's existing slots. The database
    exclusion constraint backs the overlap check for concurrent creators.
    """

    def __init__(
        self,
        session: AsyncSession,
        slot_repository: ISlotRepository,
        user_repository: IUserRepository,
    ):
        self.session = session
        self.slot_repo = slot_repository
        self.user_repo = user_repository

    async def execute(self, request: CreateSlotRequest) -> SlotView:
        """
        Execute slot creation.

        Raises:
            ValidationException: end_time is not after start_time
            EntityNotFoundException: resource missing or not a clinician
            ConflictException: interval overlaps an existing slot of the resource
        """
        slot = Slot.create(request.resource_id, request.start_time, request.end_time)

        async with atomic(self.session):
            resource = await self.user_repo.find_by_id(request.resource_id)
            if resource is None or not resource.is_clinician():
                raise EntityNotFoundException(entity_type="Clinician", entity_id=request.resource_id)

            if await self.slot_repo.has_overlap(request.resource_id, slot.start_time, slot.end_time):
                raise ConflictException(
                    f"Slot {slot.time_range} overlaps an existing slot for this clinician",
                    details={"resource_id": str(request.resource_id)},
                )

            saved = await self.slot_repo.add(slot)

        logger.info(f"Slot {saved.id} created for resource {request.resource_id}: {saved.time_range}")
        return SlotView.from_entity(saved)
