"""
API tests for the scheduling endpoints.

The application is built with the real factory; every scheduling dependency
is overridden with objects backed by the in-memory store, so no database is
needed.
"""

from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from carebook.core.app_factory import create_app
from carebook.core.domain import SlotContentionException
from carebook.domains.scheduling.api import dependencies as deps
from carebook.domains.scheduling.application.services import BookingLifecycleManager, SlotAllocator
from carebook.domains.scheduling.application.use_cases import (
    BlockSlotUseCase,
    CreateSlotUseCase,
    DeleteSlotUseCase,
    GetAvailableSlotsUseCase,
    GetBookingByIdUseCase,
    GetPatientAppointmentsUseCase,
    GetResourceScheduleUseCase,
    GetSlotUseCase,
    ListCliniciansUseCase,
    UnblockSlotUseCase,
)
from carebook.domains.scheduling.domain.value_objects import BookingStatus, SlotStatus
from tests.utils import (
    JAN_15_2024,
    JAN_16_2024,
    InMemoryBookingRepository,
    InMemorySlotRepository,
    InMemoryUserRepository,
    build_manager,
    create_booking,
    create_slot,
    make_session,
)

API = "/api/v1/scheduling"


def _override_dependencies(application, store) -> None:
    """Wire every scheduling dependency to the in-memory store, one session per request."""

    def repos():
        session = make_session(store)
        return (
            session,
            InMemorySlotRepository(store, session),
            InMemoryBookingRepository(store, session),
            InMemoryUserRepository(store),
        )

    def read_use_case(cls):
        def factory():
            _, slot_repo, booking_repo, user_repo = repos()
            return cls(booking_repo, slot_repo, user_repo)

        return factory

    def slot_admin(cls):
        def factory():
            session, slot_repo, _, _ = repos()
            return cls(session, SlotAllocator(slot_repo))

        return factory

    def create_slot_use_case():
        session, slot_repo, _, user_repo = repos()
        return CreateSlotUseCase(session, slot_repo, user_repo)

    def delete_slot_use_case():
        session, slot_repo, _, _ = repos()
        return DeleteSlotUseCase(session, slot_repo)

    overrides = application.dependency_overrides
    overrides[deps.get_booking_lifecycle_manager] = lambda: build_manager(store)[0]
    overrides[deps.get_patient_appointments_use_case] = read_use_case(GetPatientAppointmentsUseCase)
    overrides[deps.get_booking_use_case] = read_use_case(GetBookingByIdUseCase)
    overrides[deps.get_resource_schedule_use_case] = read_use_case(GetResourceScheduleUseCase)
    overrides[deps.get_available_slots_use_case] = lambda: GetAvailableSlotsUseCase(repos()[1])
    overrides[deps.get_slot_use_case] = lambda: GetSlotUseCase(repos()[1])
    overrides[deps.get_create_slot_use_case] = create_slot_use_case
    overrides[deps.get_block_slot_use_case] = slot_admin(BlockSlotUseCase)
    overrides[deps.get_unblock_slot_use_case] = slot_admin(UnblockSlotUseCase)
    overrides[deps.get_delete_slot_use_case] = delete_slot_use_case
    overrides[deps.get_list_clinicians_use_case] = lambda: ListCliniciansUseCase(repos()[3])


@pytest.fixture
def app(store):
    """Create FastAPI app for testing with in-memory dependencies."""
    application = create_app()
    _override_dependencies(application, store)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


# ============================================================================
# Bookings
# ============================================================================


@pytest.mark.unit
def test_create_booking(client, store, patient, clinician, slot):
    # Act
    response = client.post(
        f"{API}/bookings",
        json={"patientId": str(patient.id), "slotId": str(slot.id), "reason": "Checkup"},
    )

    # Assert
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "Pending"
    assert body["reason"] == "Checkup"
    assert body["isWalkIn"] is False
    assert body["patient"]["name"] == "Lisa Cuddy"
    assert body["resource"]["id"] == str(clinician.id)
    assert body["slot"]["id"] == str(slot.id)
    assert body["slot"]["status"] == "Booked"
    assert store.slot_status(slot.id) == SlotStatus.BOOKED


@pytest.mark.unit
def test_create_booking_accepts_snake_case(client, patient, slot):
    response = client.post(f"{API}/bookings", json={"patient_id": str(patient.id), "slot_id": str(slot.id)})

    assert response.status_code == 201


@pytest.mark.unit
def test_book_taken_slot_is_conflict(client, patient, other_patient, slot):
    client.post(f"{API}/bookings", json={"patientId": str(patient.id), "slotId": str(slot.id)})

    response = client.post(f"{API}/bookings", json={"patientId": str(other_patient.id), "slotId": str(slot.id)})

    assert response.status_code == 409
    body = response.json()
    assert body["error"] is True
    assert body["code"] == "SLOT_UNAVAILABLE"
    assert body["details"]["current_status"] == "Booked"


@pytest.mark.unit
def test_book_missing_slot_is_not_found(client, patient):
    response = client.post(f"{API}/bookings", json={"patientId": str(patient.id), "slotId": str(uuid4())})

    assert response.status_code == 404
    assert response.json()["code"] == "ENTITY_NOT_FOUND"


@pytest.mark.unit
def test_book_with_malformed_id(client, slot):
    response = client.post(f"{API}/bookings", json={"patientId": "not-a-uuid", "slotId": str(slot.id)})

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]["errors"][0]["field"].endswith("patientId")


@pytest.mark.unit
def test_contention_is_409(app, client, patient, slot):
    # Arrange
    manager = AsyncMock(spec=BookingLifecycleManager)
    manager.create_booking.side_effect = SlotContentionException(slot.id)
    app.dependency_overrides[deps.get_booking_lifecycle_manager] = lambda: manager

    # Act
    response = client.post(f"{API}/bookings", json={"patientId": str(patient.id), "slotId": str(slot.id)})

    # Assert
    assert response.status_code == 409
    assert response.json()["code"] == "CONTENTION"


@pytest.mark.unit
def test_get_booking(client, store, patient, slot):
    booking = create_booking(patient.id, slot.id, status=BookingStatus.CONFIRMED)
    store.add_bookings(booking)

    response = client.get(f"{API}/bookings/{booking.id}")

    assert response.status_code == 200
    assert response.json()["status"] == "Confirmed"


@pytest.mark.unit
def test_get_missing_booking(client):
    response = client.get(f"{API}/bookings/{uuid4()}")

    assert response.status_code == 404


@pytest.mark.unit
def test_patient_bookings(client, store, patient, clinician, slot):
    later = create_slot(clinician.id, JAN_16_2024, status=SlotStatus.BOOKED)
    store.add_slots(later)
    store.add_bookings(create_booking(patient.id, later.id), create_booking(patient.id, slot.id))

    response = client.get(f"{API}/patients/{patient.id}/bookings")

    assert response.status_code == 200
    assert [b["slot"]["id"] for b in response.json()] == [str(slot.id), str(later.id)]


@pytest.mark.unit
def test_update_booking_status(client, store, patient, slot):
    booking = create_booking(patient.id, slot.id)
    store.add_bookings(booking)

    response = client.patch(f"{API}/bookings/{booking.id}", json={"status": "Confirmed"})

    assert response.status_code == 200
    assert response.json()["status"] == "Confirmed"


@pytest.mark.unit
def test_update_booking_unknown_status(client, store, patient, slot):
    booking = create_booking(patient.id, slot.id)
    store.add_bookings(booking)

    response = client.patch(f"{API}/bookings/{booking.id}", json={"status": "Archived"})

    assert response.status_code == 422
    assert response.json()["details"]["field"] == "status"


@pytest.mark.unit
def test_update_booking_requires_a_field(client, store, patient, slot):
    booking = create_booking(patient.id, slot.id)
    store.add_bookings(booking)

    response = client.patch(f"{API}/bookings/{booking.id}", json={})

    assert response.status_code == 422


@pytest.mark.unit
def test_update_booking_illegal_transition(client, store, patient, slot):
    booking = create_booking(patient.id, slot.id)
    store.add_bookings(booking)

    response = client.patch(f"{API}/bookings/{booking.id}", json={"status": "Completed"})

    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_OPERATION"


@pytest.mark.unit
def test_cancel_booking(client, store, patient, slot):
    # Arrange
    slot.status = SlotStatus.BOOKED
    booking = create_booking(patient.id, slot.id)
    store.add_bookings(booking)

    # Act
    response = client.post(f"{API}/bookings/{booking.id}/cancel")

    # Assert
    assert response.status_code == 200
    assert response.json() == {
        "message": "Booking cancelled successfully",
        "bookingId": str(booking.id),
        "slotId": str(slot.id),
    }
    assert store.slot_status(slot.id) == SlotStatus.AVAILABLE


@pytest.mark.unit
def test_cancel_twice(client, store, patient, slot):
    booking = create_booking(patient.id, slot.id, status=BookingStatus.CANCELLED)
    store.add_bookings(booking)

    response = client.post(f"{API}/bookings/{booking.id}/cancel")

    assert response.status_code == 409
    assert response.json()["message"] == "Booking is already cancelled"


@pytest.mark.unit
def test_reschedule_booking(client, store, patient, clinician, slot):
    # Arrange
    slot.status = SlotStatus.BOOKED
    target = create_slot(clinician.id, JAN_16_2024)
    store.add_slots(target)
    booking = create_booking(patient.id, slot.id, status=BookingStatus.CONFIRMED)
    store.add_bookings(booking)

    # Act
    response = client.post(
        f"{API}/bookings/{booking.id}/reschedule",
        json={"newSlotId": str(target.id), "reason": "Travel"},
    )

    # Assert
    assert response.status_code == 200
    body = response.json()
    assert body["slot"]["id"] == str(target.id)
    assert body["status"] == "Pending"
    assert store.slot_status(slot.id) == SlotStatus.AVAILABLE
    assert store.slot_status(target.id) == SlotStatus.BOOKED


@pytest.mark.unit
def test_reschedule_onto_held_slot_is_conflict(client, store, patient, slot):
    slot.status = SlotStatus.BOOKED
    booking = create_booking(patient.id, slot.id, status=BookingStatus.CONFIRMED)
    store.add_bookings(booking)

    response = client.post(f"{API}/bookings/{booking.id}/reschedule", json={"newSlotId": str(slot.id)})

    assert response.status_code == 409
    assert response.json()["code"] == "SLOT_UNAVAILABLE"
    assert store.slot_status(slot.id) == SlotStatus.BOOKED


# ============================================================================
# Slots and resources
# ============================================================================


@pytest.mark.unit
def test_create_slot(client, store, clinician):
    response = client.post(
        f"{API}/slots",
        json={
            "resourceId": str(clinician.id),
            "startTime": "2024-01-15T14:00:00Z",
            "endTime": "2024-01-15T14:30:00Z",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "Available"
    assert body["version"] == 0
    assert body["startTime"].startswith("2024-01-15T14:00:00")


@pytest.mark.unit
def test_create_overlapping_slot(client, clinician, slot):
    response = client.post(
        f"{API}/slots",
        json={
            "resourceId": str(clinician.id),
            "startTime": "2024-01-15T09:15:00Z",
            "endTime": "2024-01-15T09:45:00Z",
        },
    )

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


@pytest.mark.unit
def test_create_slot_inverted_interval(client, clinician):
    response = client.post(
        f"{API}/slots",
        json={
            "resourceId": str(clinician.id),
            "startTime": "2024-01-15T10:00:00Z",
            "endTime": "2024-01-15T09:00:00Z",
        },
    )

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.unit
def test_get_slot(client, slot):
    response = client.get(f"{API}/slots/{slot.id}")

    assert response.status_code == 200
    assert response.json()["resourceId"] == str(slot.resource_id)


@pytest.mark.unit
def test_block_unblock_delete(client, store, slot):
    assert client.post(f"{API}/slots/{slot.id}/block").json()["status"] == "Blocked"
    assert client.delete(f"{API}/slots/{slot.id}").status_code == 409
    assert client.post(f"{API}/slots/{slot.id}/unblock").json()["status"] == "Available"

    response = client.delete(f"{API}/slots/{slot.id}")

    assert response.status_code == 204
    assert slot.id not in store.slots


@pytest.mark.unit
def test_unblock_available_slot(client, slot):
    response = client.post(f"{API}/slots/{slot.id}/unblock")

    assert response.status_code == 409


@pytest.mark.unit
def test_available_slots_for_day(client, store, clinician, slot):
    store.add_slots(
        create_slot(clinician.id, JAN_15_2024 + timedelta(hours=1), status=SlotStatus.BOOKED),
        create_slot(clinician.id, JAN_16_2024),
    )

    response = client.get(f"{API}/resources/{clinician.id}/available-slots", params={"date": "2024-01-15"})

    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == [str(slot.id)]


@pytest.mark.unit
def test_available_slots_requires_date(client, clinician):
    response = client.get(f"{API}/resources/{clinician.id}/available-slots")

    assert response.status_code == 422


@pytest.mark.unit
def test_resource_schedule(client, store, patient, clinician, slot):
    store.add_bookings(create_booking(patient.id, slot.id, status=BookingStatus.CONFIRMED))

    response = client.get(
        f"{API}/resources/{clinician.id}/schedule",
        params={"start": "2024-01-15T00:00:00Z", "end": "2024-01-16T00:00:00Z"},
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["patient"]["name"] == "Lisa Cuddy"


@pytest.mark.unit
def test_list_clinicians(client, clinician):
    response = client.get(f"{API}/resources")

    assert response.status_code == 200
    assert response.json() == [
        {
            "id": str(clinician.id),
            "firstName": "Gregory",
            "lastName": "House",
            "displayName": "Dr. Gregory House",
            "email": "gregory.house@example.com",
        }
    ]


# ============================================================================
# Application wiring
# ============================================================================


@pytest.mark.unit
def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.unit
def test_correlation_id_is_echoed(client, slot):
    response = client.get(f"{API}/slots/{slot.id}", headers={"X-Correlation-ID": "abc123"})

    assert response.headers["X-Correlation-ID"] == "abc123"


@pytest.mark.unit
def test_unexpected_error_is_500(app, patient, slot):
    manager = AsyncMock(spec=BookingLifecycleManager)
    manager.create_booking.side_effect = RuntimeError("database went away")
    app.dependency_overrides[deps.get_booking_lifecycle_manager] = lambda: manager
    client = TestClient(app, raise_server_exceptions=False)

    response = client.post(f"{API}/bookings", json={"patientId": str(patient.id), "slotId": str(slot.id)})

    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"
