"""
Scheduling Status Value Objects

Status enums for slots and bookings. Values match the strings stored in the
appt_slots / appt_bookings tables.
"""

from carebook.core.domain import StatusEnum


class SlotStatus(StatusEnum):
    """
    Slot availability states.

    Valid transitions (all performed by the SlotAllocator):
    - AVAILABLE -> BOOKED (claim), BLOCKED (administrative hold)
    - BOOKED -> AVAILABLE (cancellation, superseded by reschedule)
    - BLOCKED -> AVAILABLE (hold released)
    """

    AVAILABLE = "Available"
    BOOKED = "Booked"
    BLOCKED = "Blocked"

    def is_claimable(self) -> bool:
        return self is SlotStatus.AVAILABLE


_BOOKING_TRANSITIONS: dict[str, frozenset[str]] = {
    "Pending": frozenset({"Confirmed", "Cancelled"}),
    "Confirmed": frozenset({"Cancelled", "Completed"}),
    "Cancelled": frozenset(),
    "Completed": frozenset(),
}


class BookingStatus(StatusEnum):
    """
    Booking lifecycle states.

    Valid transitions:
    - PENDING -> CONFIRMED, CANCELLED
    - CONFIRMED -> CANCELLED, COMPLETED
    - CANCELLED -> (terminal)
    - COMPLETED -> (terminal)

    Rescheduling is not a status transition: it keeps a non-terminal booking
    alive and resets it to PENDING.
    """

    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"

    def can_transition_to(self, new_status: "BookingStatus") -> bool:
        """Check if transition to new status is valid."""
        return new_status.value in _BOOKING_TRANSITIONS[self.value]

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return self in (BookingStatus.CANCELLED, BookingStatus.COMPLETED)

    def is_active(self) -> bool:
        """Active bookings hold their slot in Booked status."""
        return not self.is_terminal()


class UserRole(StatusEnum):
    """Roles of the users this core reads from the identity store."""

    PATIENT = "patient"
    CLINICIAN = "clinician"
    ADMIN = "admin"
