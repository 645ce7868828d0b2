"""
Booking Entity for Scheduling Domain

Represents a patient's claim on a slot and its lifecycle.
"""

from dataclasses import dataclass
from uuid import UUID

from carebook.core.domain import AggregateRoot, InvalidOperationException

from ..value_objects import BookingStatus


@dataclass
class Booking(AggregateRoot[UUID]):
    """
    Booking aggregate root.

    Example:
        ```python
        booking = Booking.create_pending(patient_id=patient.id, slot_id=slot.id)
        booking.change_status(BookingStatus.CONFIRMED)
        booking.cancel()
        ```
    """

    patient_id: UUID | None = None
    slot_id: UUID | None = None
    status: BookingStatus = BookingStatus.PENDING
    reason: str | None = None
    is_walk_in: bool = False

    @classmethod
    def create_pending(
        cls,
        patient_id: UUID,
        slot_id: UUID,
        reason: str | None = None,
    ) -> "Booking":
        """Factory for a booking created together with its slot claim."""
        return cls(
            patient_id=patient_id,
            slot_id=slot_id,
            status=BookingStatus.PENDING,
            reason=reason,
            is_walk_in=False,
        )

    def is_active(self) -> bool:
        return self.status.is_active()

    def ensure_mutable(self, operation: str) -> None:
        """Raise if the booking is in a terminal state."""
        if not self.status.is_terminal():
            return
        state = self.status.value.lower()
        if operation == "update":
            message = f"Cannot update {state} booking"
        elif operation == "cancel" and self.status == BookingStatus.CANCELLED:
            message = "Booking is already cancelled"
        else:
            message = f"Cannot {operation} a {state} booking"
        raise InvalidOperationException(operation, self.status.value, message)

    def cancel(self) -> None:
        self.ensure_mutable("cancel")
        self.status = BookingStatus.CANCELLED
        self.touch()

    def move_to_slot(self, new_slot_id: UUID) -> UUID | None:
        """
        Point the booking at a new slot and reset it to Pending.

        Returns:
            The previously referenced slot id
        """
        self.ensure_mutable("reschedule")
        previous = self.slot_id
        self.slot_id = new_slot_id
        self.status = BookingStatus.PENDING
        self.touch()
        return previous

    def change_status(self, new_status: BookingStatus) -> None:
        """Apply a direct status transition following the booking state machine."""
        self.ensure_mutable("update")
        if new_status == self.status:
            return
        if not self.status.can_transition_to(new_status):
            raise InvalidOperationException(
                f"transition to {new_status.value}",
                self.status.value,
                f"Cannot change booking status from {self.status.value} to {new_status.value}",
            )
        self.status = new_status
        self.touch()

    def update_reason(self, reason: str | None) -> None:
        self.ensure_mutable("update")
        self.reason = reason
        self.touch()
