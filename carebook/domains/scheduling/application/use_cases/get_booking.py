"""
Get Booking Use Case
"""

from uuid import UUID

from carebook.core.domain import EntityNotFoundException
from carebook.domains.scheduling.application.dto import BookingView
from carebook.domains.scheduling.application.ports import (
    IBookingRepository,
    ISlotRepository,
    IUserRepository,
)


class GetBookingByIdUseCase:
    """Fetch a single booking with its patient, resource and slot."""

    def __init__(
        self,
        booking_repository: IBookingRepository,
        slot_repository: ISlotRepository,
        user_repository: IUserRepository,
    ):
        self.booking_repo = booking_repository
        self.slot_repo = slot_repository
        self.user_repo = user_repository

    async def execute(self, booking_id: UUID) -> BookingView:
        booking = await self.booking_repo.find_by_id(booking_id)
        if booking is None:
            raise EntityNotFoundException(entity_type="Booking", entity_id=booking_id)

        slot = await self.slot_repo.find_by_id(booking.slot_id) if booking.slot_id else None
        user_ids = [booking.patient_id] + ([slot.resource_id] if slot else [])
        people = await self.user_repo.find_by_ids(user_ids)
        return BookingView.build(booking, slot, people)
