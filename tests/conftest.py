"""
Shared pytest fixtures for all tests.

Every test runs without a database: storage is the in-memory store from
tests.utils, sessions are AsyncMock(spec=AsyncSession).
"""

import os

import pytest

# Ensure test environment
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("NOTIFICATION_BACKEND", "log")

from carebook.core.container import reset_container  # noqa: E402
from carebook.domains.scheduling.application.services import (  # noqa: E402
    NotificationPublisher,
    SlotAllocator,
)
from carebook.domains.scheduling.domain.value_objects import UserRole  # noqa: E402
from tests.utils import (  # noqa: E402
    JAN_15_2024,
    InMemorySlotRepository,
    InMemoryStore,
    RecordingDispatcher,
    create_person,
    create_slot,
    make_session,
)


# ============================================================================
# PEOPLE
# ============================================================================


@pytest.fixture
def patient():
    return create_person("Lisa", "Cuddy", UserRole.PATIENT)


@pytest.fixture
def other_patient():
    return create_person("James", "Wilson", UserRole.PATIENT)


@pytest.fixture
def clinician():
    return create_person("Gregory", "House", UserRole.CLINICIAN)


# ============================================================================
# STORE
# ============================================================================


@pytest.fixture
def store(patient, other_patient, clinician) -> InMemoryStore:
    """Store seeded with two patients and one clinician."""
    store = InMemoryStore()
    store.add_people(patient, other_patient, clinician)
    return store


@pytest.fixture
def slot(store, clinician):
    """An Available 30 minute slot on Monday, January 15, 2024 at 09:00 UTC."""
    slot = create_slot(clinician.id, JAN_15_2024)
    store.add_slots(slot)
    return slot


@pytest.fixture
def session(store):
    return make_session(store)


@pytest.fixture
def slot_repository(store, session) -> InMemorySlotRepository:
    return InMemorySlotRepository(store, session)


@pytest.fixture
def slot_allocator(slot_repository) -> SlotAllocator:
    return SlotAllocator(slot_repository)


# ============================================================================
# NOTIFICATIONS
# ============================================================================


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def publisher(dispatcher) -> NotificationPublisher:
    return NotificationPublisher(dispatcher)


@pytest.fixture(autouse=True)
def _fresh_container():
    """Each test starts with no cached container."""
    reset_container()
    yield
    reset_container()
