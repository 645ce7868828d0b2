"""
Get Available Slots Use Case

Read path for the booking calendar. Takes no locks: a slot listed here may be
claimed by someone else before the caller books it, in which case the claim
reports a conflict.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from uuid import UUID

from carebook.domains.scheduling.application.dto import SlotView
from carebook.domains.scheduling.application.ports import ISlotRepository
from carebook.domains.scheduling.domain.value_objects import TimeRange

logger = logging.getLogger(__name__)


@dataclass
class GetAvailableSlotsRequest:
    """Request for available slots. Give either ``day`` or both range bounds."""

    resource_id: UUID
    day: date | None = None
    range_start: datetime | None = None
    range_end: datetime | None = None
    tz: tzinfo | None = None

    def to_time_range(self) -> TimeRange:
        if self.day is not None:
            return TimeRange.for_day(self.day, self.tz)
        return TimeRange(start=self.range_start, end=self.range_end)


class GetAvailableSlotsUseCase:
    """Lists Available slots of a resource, ordered by start time."""

    def __init__(self, slot_repository: ISlotRepository):
        self.slot_repo = slot_repository

    async def execute(self, request: GetAvailableSlotsRequest) -> list[SlotView]:
        window = request.to_time_range()
        slots = await self.slot_repo.find_by_resource(
            request.resource_id,
            window.start,
            window.end,
            available_only=True,
        )
        logger.debug(f"{len(slots)} available slot(s) for resource {request.resource_id} in {window}")
        return [SlotView.from_entity(slot) for slot in slots]
