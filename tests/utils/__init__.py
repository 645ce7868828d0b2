"""Test utilities: factories and in-memory fakes for the scheduling core."""

from tests.utils.factories import (
    JAN_15_2024,
    JAN_16_2024,
    create_booking,
    create_person,
    create_slot,
)
from tests.utils.fakes import (
    FailingDispatcher,
    InMemoryBookingRepository,
    InMemorySlotRepository,
    InMemoryStore,
    InMemoryUserRepository,
    RecordingDispatcher,
    build_manager,
    make_session,
)

__all__ = [
    "JAN_15_2024",
    "JAN_16_2024",
    "create_booking",
    "create_person",
    "create_slot",
    "FailingDispatcher",
    "InMemoryBookingRepository",
    "InMemorySlotRepository",
    "InMemoryStore",
    "InMemoryUserRepository",
    "RecordingDispatcher",
    "build_manager",
    "make_session",
]
