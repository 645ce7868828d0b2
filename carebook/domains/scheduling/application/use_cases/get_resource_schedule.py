"""
Get Resource Schedule Use Case

A clinician's agenda: every non-cancelled booking on the clinician's slots
within a time range.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from carebook.domains.scheduling.application.dto import BookingView
from carebook.domains.scheduling.application.ports import (
    IBookingRepository,
    ISlotRepository,
    IUserRepository,
)
from carebook.domains.scheduling.domain.value_objects import BookingStatus, TimeRange


@dataclass
class GetResourceScheduleRequest:
    """Request for a resource schedule."""

    resource_id: UUID
    range_start: datetime
    range_end: datetime


class GetResourceScheduleUseCase:
    """Bookings on a resource's slots starting within the range, ordered by start time."""

    def __init__(
        self,
        booking_repository: IBookingRepository,
        slot_repository: ISlotRepository,
        user_repository: IUserRepository,
    ):
        self.booking_repo = booking_repository
        self.slot_repo = slot_repository
        self.user_repo = user_repository

    async def execute(self, request: GetResourceScheduleRequest) -> list[BookingView]:
        window = TimeRange(start=request.range_start, end=request.range_end)
        slots = await self.slot_repo.find_by_resource(request.resource_id, window.start, window.end)
        if not slots:
            return []

        slots_by_id = {slot.id: slot for slot in slots}
        bookings = await self.booking_repo.find_by_slot_ids(
            list(slots_by_id),
            exclude_status=BookingStatus.CANCELLED,
        )
        people = await self.user_repo.find_by_ids(
            [request.resource_id, *{b.patient_id for b in bookings}]
        )

        bookings.sort(key=lambda b: slots_by_id[b.slot_id].start_time)
        return [BookingView.build(b, slots_by_id[b.slot_id], people) for b in bookings]
