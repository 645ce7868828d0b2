"""
Get Patient Appointments Use Case

Lists every booking of a patient, oldest appointment first.
"""

import logging
from datetime import datetime
from uuid import UUID

from carebook.core.domain import EntityNotFoundException
from carebook.domains.scheduling.application.dto import BookingView
from carebook.domains.scheduling.application.ports import (
    IBookingRepository,
    ISlotRepository,
    IUserRepository,
)
from carebook.domains.scheduling.domain.entities import Booking, Slot

logger = logging.getLogger(__name__)


class GetPatientAppointmentsUseCase:
    """
    Use case for a patient's appointment history.

    Bookings are ordered by slot start time; bookings whose slot is gone
    come last, newest first.
    """

    def __init__(
        self,
        booking_repository: IBookingRepository,
        slot_repository: ISlotRepository,
        user_repository: IUserRepository,
    ):
        self.booking_repo = booking_repository
        self.slot_repo = slot_repository
        self.user_repo = user_repository

    async def execute(self, patient_id: UUID) -> list[BookingView]:
        """
        Execute the lookup.

        Args:
            patient_id: Patient user id

        Returns:
            Booking views ordered by appointment time

        Raises:
            EntityNotFoundException: patient does not exist
        """
        patient = await self.user_repo.find_by_id(patient_id)
        if patient is None:
            raise EntityNotFoundException(entity_type="Patient", entity_id=patient_id)

        bookings = await self.booking_repo.find_by_patient(patient_id)
        slot_ids = [b.slot_id for b in bookings if b.slot_id is not None]
        slots = await self.slot_repo.find_by_ids(slot_ids) if slot_ids else {}

        resource_ids = {slot.resource_id for slot in slots.values()}
        people = await self.user_repo.find_by_ids([patient_id, *resource_ids])

        def sort_key(booking: Booking) -> tuple[int, float]:
            slot: Slot | None = slots.get(booking.slot_id) if booking.slot_id else None
            if slot is None:
                return (1, -_timestamp(booking.created_at))
            return (0, _timestamp(slot.start_time))

        ordered = sorted(bookings, key=sort_key)
        logger.debug(f"Patient {patient_id} has {len(ordered)} booking(s)")
        return [
            BookingView.build(booking, slots.get(booking.slot_id) if booking.slot_id else None, people)
            for booking in ordered
        ]


def _timestamp(moment: datetime | None) -> float:
    return moment.timestamp() if moment else 0.0
