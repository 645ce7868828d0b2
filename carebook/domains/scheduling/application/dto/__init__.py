"""
Scheduling Application DTOs

Data Transfer Objects for the Scheduling domain.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from carebook.domains.scheduling.domain.entities import Booking, Person, Slot

CANCELLATION_MESSAGE = "Booking cancelled successfully"


# ==================== Slot DTOs ====================


@dataclass
class ClaimedSlot:
    """Result of a successful claim: the slot is Booked inside the caller's transaction."""

    slot_id: UUID
    resource_id: UUID
    start_time: datetime
    end_time: datetime


@dataclass
class SlotView:
    """Slot data transfer object"""

    id: UUID
    resource_id: UUID
    start_time: datetime
    end_time: datetime
    status: str
    version: int

    @classmethod
    def from_entity(cls, slot: Slot) -> "SlotView":
        return cls(
            id=slot.id,
            resource_id=slot.resource_id,
            start_time=slot.start_time,
            end_time=slot.end_time,
            status=slot.status.value,
            version=slot.version,
        )


# ==================== Booking DTOs ====================


@dataclass
class PartyView:
    """Patient or resource as embedded in a booking view"""

    id: UUID
    name: str
    email: str | None = None

    @classmethod
    def from_person(cls, person: Person | None, person_id: UUID) -> "PartyView":
        if person is None:
            return cls(id=person_id, name="")
        return cls(id=person.id, name=person.full_name, email=person.email)


@dataclass
class BookingSlotView:
    """Slot summary embedded in a booking view"""

    id: UUID
    start_time: datetime
    end_time: datetime
    status: str


@dataclass
class BookingView:
    """Booking with its patient, resource and slot"""

    id: UUID
    status: str
    reason: str | None
    is_walk_in: bool
    patient: PartyView
    resource: PartyView | None
    slot: BookingSlotView | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def build(
        cls,
        booking: Booking,
        slot: Slot | None,
        people: dict[UUID, Person],
    ) -> "BookingView":
        """
        Assemble a view from a booking and its related records.

        Args:
            booking: Booking entity
            slot: Slot referenced by the booking, if it still exists
            people: Users indexed by id (patient and slot owner)
        """
        resource = None
        slot_view = None
        if slot is not None:
            resource = PartyView.from_person(people.get(slot.resource_id), slot.resource_id)
            slot_view = BookingSlotView(
                id=slot.id,
                start_time=slot.start_time,
                end_time=slot.end_time,
                status=slot.status.value,
            )
        return cls(
            id=booking.id,
            status=booking.status.value,
            reason=booking.reason,
            is_walk_in=booking.is_walk_in,
            patient=PartyView.from_person(people.get(booking.patient_id), booking.patient_id),
            resource=resource,
            slot=slot_view,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


@dataclass
class CancellationResult:
    """Response from cancelling a booking"""

    booking_id: UUID
    slot_id: UUID | None
    message: str = CANCELLATION_MESSAGE


__all__ = [
    "CANCELLATION_MESSAGE",
    "ClaimedSlot",
    "SlotView",
    "PartyView",
    "BookingSlotView",
    "BookingView",
    "CancellationResult",
]
