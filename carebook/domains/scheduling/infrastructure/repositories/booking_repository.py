"""
Booking Repository Implementation

SQLAlchemy implementation of IBookingRepository.
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from carebook.core.domain import ConflictException, generate_uuid
from carebook.domains.scheduling.application.ports import IBookingRepository
from carebook.domains.scheduling.domain.entities import Booking
from carebook.domains.scheduling.domain.value_objects import BookingStatus
from carebook.domains.scheduling.infrastructure.persistence.sqlalchemy.errors import (
    UNIQUE_VIOLATION,
    sqlstate_of,
)
from carebook.domains.scheduling.infrastructure.persistence.sqlalchemy.models import BookingModel

logger = logging.getLogger(__name__)


class SQLAlchemyBookingRepository(IBookingRepository):
    """
    SQLAlchemy implementation of booking repository.

    Writes are flushed, never committed; the lifecycle manager owns the
    transaction.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, booking_id: UUID) -> Booking | None:
        """Find booking by ID."""
        result = await self.session.execute(
            select(BookingModel).where(BookingModel.id == booking_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def lock_for_update(self, booking_id: UUID) -> Booking | None:
        """Find booking by ID, waiting for and holding its row lock."""
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.id == booking_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_patient(self, patient_id: UUID) -> list[Booking]:
        """Find all bookings of a patient, newest first."""
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.patient_id == patient_id)
            .order_by(BookingModel.created_at.desc())
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_by_slot_ids(
        self,
        slot_ids: list[UUID],
        exclude_status: BookingStatus | None = None,
    ) -> list[Booking]:
        """Find bookings referencing the given slots."""
        if not slot_ids:
            return []

        query = select(BookingModel).where(BookingModel.slot_id.in_(set(slot_ids)))
        if exclude_status is not None:
            query = query.where(BookingModel.status != exclude_status.value)

        result = await self.session.execute(query)
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def add(self, booking: Booking) -> Booking:
        """Insert a new booking."""
        model = self._to_model(booking)
        self.session.add(model)
        await self._flush(booking)
        return self._to_entity(model)

    async def save(self, booking: Booking) -> Booking:
        """Update an existing booking."""
        model = await self.session.get(BookingModel, booking.id)
        if model is None:
            return await self.add(booking)

        self._update_model(model, booking)
        await self._flush(booking)
        return self._to_entity(model)

    async def _flush(self, booking: Booking) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            if sqlstate_of(e) == UNIQUE_VIOLATION:
                logger.warning(f"Slot {booking.slot_id} already has an active booking")
                raise ConflictException(
                    "Slot already has an active booking",
                    code="SLOT_UNAVAILABLE",
                    details={"slot_id": str(booking.slot_id)},
                ) from e
            raise

    # Mapping methods

    def _to_entity(self, model: BookingModel) -> Booking:
        """Convert model to entity."""
        return Booking(
            id=model.id,
            patient_id=model.patient_id,
            slot_id=model.slot_id,
            status=BookingStatus(model.status),
            reason=model.reason,
            is_walk_in=bool(model.is_walk_in),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, booking: Booking) -> BookingModel:
        """Convert entity to model."""
        return BookingModel(
            id=booking.id or generate_uuid(),
            patient_id=booking.patient_id,
            slot_id=booking.slot_id,
            status=booking.status.value,
            reason=booking.reason,
            is_walk_in=booking.is_walk_in,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )

    def _update_model(self, model: BookingModel, booking: Booking) -> None:
        """Update model from entity."""
        model.slot_id = booking.slot_id
        model.status = booking.status.value
        model.reason = booking.reason
        model.updated_at = booking.updated_at
