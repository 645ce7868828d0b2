"""
Booking Repository Port

Interface for booking data access following Clean Architecture.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from carebook.domains.scheduling.domain.entities import Booking
from carebook.domains.scheduling.domain.value_objects import BookingStatus


@runtime_checkable
class IBookingRepository(Protocol):
    """
    Booking repository interface.

    Example:
        ```python
        class SQLAlchemyBookingRepository(IBookingRepository):
            async def find_by_id(self, booking_id: UUID) -> Booking | None:
                ...
        ```
    """

    async def find_by_id(self, booking_id: UUID) -> Booking | None:
        """
        Find booking by ID.

        Args:
            booking_id: Unique booking identifier

        Returns:
            Booking if found, None otherwise
        """
        ...

    async def lock_for_update(self, booking_id: UUID) -> Booking | None:
        """Read the booking holding its row lock until the transaction ends."""
        ...

    async def find_by_patient(self, patient_id: UUID) -> list[Booking]:
        ...

    async def find_by_slot_ids(
        self,
        slot_ids: list[UUID],
        exclude_status: BookingStatus | None = None,
    ) -> list[Booking]:
        """
        Find bookings referencing any of the given slots.

        Args:
            slot_ids: Slot identifiers
            exclude_status: Optional status to leave out

        Returns:
            Matching bookings
        """
        ...

    async def add(self, booking: Booking) -> Booking:
        ...

    async def save(self, booking: Booking) -> Booking:
        """Persist changes to an existing booking."""
        ...
