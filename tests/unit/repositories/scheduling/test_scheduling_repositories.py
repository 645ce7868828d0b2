"""
Unit tests for Scheduling Domain Repositories.

Tests the SQLAlchemy data access layer against a mocked AsyncSession: entity
mapping, the locking statements, and translation of PostgreSQL errors.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from carebook.core.domain import ConflictException, SlotContentionException
from carebook.domains.scheduling.domain.entities import Booking, Slot
from carebook.domains.scheduling.domain.value_objects import BookingStatus, SlotStatus, UserRole
from carebook.domains.scheduling.infrastructure.persistence.sqlalchemy.errors import (
    is_lock_not_available,
    sqlstate_of,
)
from carebook.domains.scheduling.infrastructure.repositories import (
    SQLAlchemyBookingRepository,
    SQLAlchemySlotRepository,
    SQLAlchemyUserRepository,
)

START = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)


class PgDriverError(Exception):
    """Driver exception exposing a SQLSTATE, like psycopg2 and asyncpg do."""

    def __init__(self, sqlstate: str, message: str = "driver error"):
        super().__init__(message)
        self.sqlstate = sqlstate


def _compiled(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def mock_async_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.get = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_slot_model():
    """Sample SQLAlchemy slot model."""
    model = MagicMock()
    model.id = uuid4()
    model.resource_id = uuid4()
    model.start_time = START
    model.end_time = START + timedelta(minutes=30)
    model.status = "Available"
    model.version = 3
    model.created_at = datetime.now(UTC)
    model.updated_at = datetime.now(UTC)
    return model


@pytest.fixture
def sample_booking_model():
    """Sample SQLAlchemy booking model."""
    model = MagicMock()
    model.id = uuid4()
    model.patient_id = uuid4()
    model.slot_id = uuid4()
    model.status = "Confirmed"
    model.reason = "Checkup"
    model.is_walk_in = False
    model.created_at = datetime.now(UTC)
    model.updated_at = datetime.now(UTC)
    return model


@pytest.fixture
def sample_user_model():
    model = MagicMock()
    model.id = uuid4()
    model.first_name = "Gregory"
    model.last_name = "House"
    model.email = "house@example.com"
    model.phone_number = None
    model.role = "clinician"
    return model


# ============================================================================
# Slot Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_find_by_id_success(mock_async_session, sample_slot_model):
    """Test successfully getting a slot by ID."""
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_slot_model
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    slot = await repository.find_by_id(sample_slot_model.id)

    # Assert
    assert slot is not None
    assert slot.id == sample_slot_model.id
    assert slot.status == SlotStatus.AVAILABLE
    assert slot.version == 3
    mock_async_session.execute.assert_called_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_find_by_id_not_found(mock_async_session):
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    slot = await repository.find_by_id(uuid4())

    # Assert
    assert slot is None


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_lock_uses_for_update_nowait(mock_async_session, sample_slot_model):
    """The lock query must fail fast instead of queueing behind another claimer."""
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_slot_model
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    slot = await repository.lock_for_update(sample_slot_model.id)

    # Assert
    assert slot.id == sample_slot_model.id
    statement = mock_async_session.execute.call_args[0][0]
    assert "FOR UPDATE NOWAIT" in _compiled(statement)


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_lock_not_available_is_contention(mock_async_session):
    # Arrange
    slot_id = uuid4()
    mock_async_session.execute.side_effect = OperationalError(
        "SELECT ... FOR UPDATE NOWAIT", {}, PgDriverError("55P03", "could not obtain lock on row")
    )

    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act & Assert
    with pytest.raises(SlotContentionException) as exc_info:
        await repository.lock_for_update(slot_id)
    assert exc_info.value.code == "CONTENTION"
    assert exc_info.value.entity_id == slot_id


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_lock_other_database_errors_propagate(mock_async_session):
    mock_async_session.execute.side_effect = OperationalError(
        "SELECT 1", {}, PgDriverError("08006", "connection failure")
    )

    repository = SQLAlchemySlotRepository(mock_async_session)

    with pytest.raises(OperationalError):
        await repository.lock_for_update(uuid4())


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
@pytest.mark.parametrize(("rowcount", "expected"), [(1, True), (0, False)])
async def test_slot_conditional_claim(mock_async_session, rowcount, expected):
    """The claim UPDATE only matches Available rows; rowcount reports the outcome."""
    # Arrange
    mock_result = MagicMock()
    mock_result.rowcount = rowcount
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    claimed = await repository.mark_booked_if_available(uuid4())

    # Assert
    assert claimed is expected
    sql = _compiled(mock_async_session.execute.call_args[0][0])
    assert sql.startswith("UPDATE appt_slots")
    assert "appt_slots.status = " in sql


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_find_by_resource(mock_async_session, sample_slot_model):
    # Arrange
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = [sample_slot_model]
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    slots = await repository.find_by_resource(
        sample_slot_model.resource_id, START, START + timedelta(days=1), available_only=True
    )

    # Assert
    assert len(slots) == 1
    sql = _compiled(mock_async_session.execute.call_args[0][0])
    assert "FOR UPDATE" not in sql
    assert "ORDER BY appt_slots.start_time" in sql


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_add_flushes_without_commit(mock_async_session):
    # Arrange
    repository = SQLAlchemySlotRepository(mock_async_session)
    slot = Slot.create(uuid4(), START, START + timedelta(minutes=30))

    # Act
    saved = await repository.add(slot)

    # Assert
    assert saved.id is not None
    assert saved.status == SlotStatus.AVAILABLE
    mock_async_session.add.assert_called_once()
    mock_async_session.flush.assert_awaited_once()
    mock_async_session.commit.assert_not_called()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_add_overlap_is_conflict(mock_async_session):
    # Arrange
    mock_async_session.flush.side_effect = IntegrityError(
        "INSERT INTO appt_slots", {}, PgDriverError("23P01", "conflicting key value violates exclusion constraint")
    )
    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act & Assert
    with pytest.raises(ConflictException):
        await repository.add(Slot.create(uuid4(), START, START + timedelta(minutes=30)))


# ============================================================================
# Booking Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_booking_find_by_id(mock_async_session, sample_booking_model):
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_booking_model
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemyBookingRepository(mock_async_session)

    # Act
    booking = await repository.find_by_id(sample_booking_model.id)

    # Assert
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.reason == "Checkup"
    assert booking.slot_id == sample_booking_model.slot_id


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_booking_lock_waits_for_row(mock_async_session, sample_booking_model):
    """Booking rows use a blocking lock, unlike slots."""
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_booking_model
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemyBookingRepository(mock_async_session)

    # Act
    await repository.lock_for_update(sample_booking_model.id)

    # Assert
    sql = _compiled(mock_async_session.execute.call_args[0][0])
    assert "FOR UPDATE" in sql
    assert "NOWAIT" not in sql


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_booking_find_by_slot_ids_empty(mock_async_session):
    repository = SQLAlchemyBookingRepository(mock_async_session)

    assert await repository.find_by_slot_ids([]) == []
    mock_async_session.execute.assert_not_called()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_booking_add_second_active_booking_is_conflict(mock_async_session):
    # Arrange
    mock_async_session.flush.side_effect = IntegrityError(
        "INSERT INTO appt_bookings", {}, PgDriverError("23505", "duplicate key value")
    )
    repository = SQLAlchemyBookingRepository(mock_async_session)

    # Act & Assert
    with pytest.raises(ConflictException) as exc_info:
        await repository.add(Booking.create_pending(patient_id=uuid4(), slot_id=uuid4()))
    assert exc_info.value.code == "SLOT_UNAVAILABLE"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_booking_add_other_integrity_errors_propagate(mock_async_session):
    mock_async_session.flush.side_effect = IntegrityError(
        "INSERT INTO appt_bookings", {}, PgDriverError("23503", "foreign key violation")
    )
    repository = SQLAlchemyBookingRepository(mock_async_session)

    with pytest.raises(IntegrityError):
        await repository.add(Booking.create_pending(patient_id=uuid4(), slot_id=uuid4()))


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_booking_save_updates_model(mock_async_session, sample_booking_model):
    # Arrange
    mock_async_session.get.return_value = sample_booking_model
    repository = SQLAlchemyBookingRepository(mock_async_session)
    new_slot = uuid4()
    booking = Booking(
        id=sample_booking_model.id,
        patient_id=sample_booking_model.patient_id,
        slot_id=new_slot,
        status=BookingStatus.PENDING,
        reason="Checkup",
    )

    # Act
    await repository.save(booking)

    # Assert
    assert sample_booking_model.slot_id == new_slot
    assert sample_booking_model.status == "Pending"
    mock_async_session.flush.assert_awaited_once()
    mock_async_session.commit.assert_not_called()


# ============================================================================
# User Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_user_find_by_ids(mock_async_session, sample_user_model):
    # Arrange
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = [sample_user_model]
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemyUserRepository(mock_async_session)

    # Act
    people = await repository.find_by_ids([sample_user_model.id, None])

    # Assert
    person = people[sample_user_model.id]
    assert person.role == UserRole.CLINICIAN
    assert person.doctor_name == "Dr. Gregory House"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_user_find_by_ids_empty(mock_async_session):
    repository = SQLAlchemyUserRepository(mock_async_session)

    assert await repository.find_by_ids([]) == {}
    mock_async_session.execute.assert_not_called()


# ============================================================================
# Error classification
# ============================================================================


@pytest.mark.unit
def test_sqlstate_from_asyncpg_cause():
    """asyncpg keeps the native error as the cause of the adapted one."""
    adapted = Exception("adapted")
    adapted.__cause__ = PgDriverError("55P03")
    error = DBAPIError("SELECT 1", {}, adapted)

    assert sqlstate_of(error) == "55P03"
    assert is_lock_not_available(error) is True


@pytest.mark.unit
def test_lock_error_detected_by_message():
    error = DBAPIError("SELECT 1", {}, Exception("could not obtain lock on row in relation \"appt_slots\""))

    assert sqlstate_of(error) is None
    assert is_lock_not_available(error) is True
