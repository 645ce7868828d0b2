"""
Scheduling Domain Layer

Entities, value objects and events of the slot allocation and booking core.
"""

from carebook.domains.scheduling.domain.entities import Booking, Person, Slot
from carebook.domains.scheduling.domain.events import (
    AppointmentBooked,
    AppointmentCancelled,
    AppointmentEvent,
    AppointmentRescheduled,
)
from carebook.domains.scheduling.domain.value_objects import (
    BookingStatus,
    SlotStatus,
    TimeRange,
    UserRole,
    format_appointment_date,
)

__all__ = [
    # Entities
    "Booking",
    "Person",
    "Slot",
    # Events
    "AppointmentEvent",
    "AppointmentBooked",
    "AppointmentCancelled",
    "AppointmentRescheduled",
    # Value Objects
    "BookingStatus",
    "SlotStatus",
    "TimeRange",
    "UserRole",
    "format_appointment_date",
]
