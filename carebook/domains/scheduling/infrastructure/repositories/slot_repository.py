"""
Slot Repository Implementation

SQLAlchemy implementation of ISlotRepository.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from carebook.core.domain import ConflictException, SlotContentionException, generate_uuid
from carebook.domains.scheduling.application.ports import ISlotRepository
from carebook.domains.scheduling.domain.entities import Slot
from carebook.domains.scheduling.domain.value_objects import SlotStatus
from carebook.domains.scheduling.infrastructure.persistence.sqlalchemy.errors import (
    EXCLUSION_VIOLATION,
    is_lock_not_available,
    sqlstate_of,
)
from carebook.domains.scheduling.infrastructure.persistence.sqlalchemy.models import SlotModel

logger = logging.getLogger(__name__)


class SQLAlchemySlotRepository(ISlotRepository):
    """
    SQLAlchemy implementation of slot repository.

    Never commits: every statement joins the session's current transaction.
    Status writes are single conditional UPDATE statements whose row count
    tells the caller whether the transition happened.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, slot_id: UUID) -> Slot | None:
        """Find slot by ID."""
        result = await self.session.execute(
            select(SlotModel)
            .where(SlotModel.id == slot_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_ids(self, slot_ids: list[UUID]) -> dict[UUID, Slot]:
        if not slot_ids:
            return {}
        result = await self.session.execute(
            select(SlotModel)
            .where(SlotModel.id.in_(set(slot_ids)))
            .execution_options(populate_existing=True)
        )
        return {model.id: self._to_entity(model) for model in result.scalars().all()}

    async def lock_for_update(self, slot_id: UUID) -> Slot | None:
        """SELECT ... FOR UPDATE NOWAIT on the slot row."""
        query = (
            select(SlotModel)
            .where(SlotModel.id == slot_id)
            .with_for_update(nowait=True)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(query)
        except DBAPIError as e:
            if is_lock_not_available(e):
                logger.info(f"Slot {slot_id} is locked by another transaction")
                raise SlotContentionException(slot_id) from e
            raise

        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def _transition(self, slot_id: UUID, new_status: SlotStatus, *conditions) -> bool:
        result = await self.session.execute(
            update(SlotModel)
            .where(SlotModel.id == slot_id, *conditions)
            .values(
                status=new_status.value,
                version=SlotModel.version + 1,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def mark_booked_if_available(self, slot_id: UUID) -> bool:
        return await self._transition(
            slot_id, SlotStatus.BOOKED, SlotModel.status == SlotStatus.AVAILABLE.value
        )

    async def mark_blocked_if_available(self, slot_id: UUID) -> bool:
        return await self._transition(
            slot_id, SlotStatus.BLOCKED, SlotModel.status == SlotStatus.AVAILABLE.value
        )

    async def mark_available(self, slot_id: UUID) -> bool:
        return await self._transition(
            slot_id, SlotStatus.AVAILABLE, SlotModel.status != SlotStatus.AVAILABLE.value
        )

    async def find_by_resource(
        self,
        resource_id: UUID,
        range_start: datetime,
        range_end: datetime,
        available_only: bool = False,
    ) -> list[Slot]:
        """Find slots of a resource starting within the range."""
        query = select(SlotModel).where(
            SlotModel.resource_id == resource_id,
            SlotModel.start_time >= range_start,
            SlotModel.start_time < range_end,
        )
        if available_only:
            query = query.where(SlotModel.status == SlotStatus.AVAILABLE.value)

        query = query.order_by(SlotModel.start_time)

        result = await self.session.execute(query)
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def has_overlap(self, resource_id: UUID, start_time: datetime, end_time: datetime) -> bool:
        """Half-open intersection test against the resource's slots."""
        result = await self.session.execute(
            select(SlotModel.id)
            .where(
                SlotModel.resource_id == resource_id,
                SlotModel.start_time < end_time,
                SlotModel.end_time > start_time,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def add(self, slot: Slot) -> Slot:
        """Insert a new slot."""
        model = self._to_model(slot)
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if sqlstate_of(e) == EXCLUSION_VIOLATION:
                raise ConflictException(
                    "Slot overlaps an existing slot for this clinician",
                    details={"resource_id": str(slot.resource_id)},
                ) from e
            raise
        return self._to_entity(model)

    async def delete_if_available(self, slot_id: UUID) -> bool:
        """Delete slot while it is Available."""
        result = await self.session.execute(
            delete(SlotModel)
            .where(SlotModel.id == slot_id, SlotModel.status == SlotStatus.AVAILABLE.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # Mapping methods

    def _to_entity(self, model: SlotModel) -> Slot:
        """Convert model to entity."""
        return Slot(
            id=model.id,
            resource_id=model.resource_id,
            start_time=model.start_time,
            end_time=model.end_time,
            status=SlotStatus(model.status),
            version=model.version or 0,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, slot: Slot) -> SlotModel:
        """Convert entity to model."""
        return SlotModel(
            id=slot.id or generate_uuid(),
            resource_id=slot.resource_id,
            start_time=slot.start_time,
            end_time=slot.end_time,
            status=slot.status.value,
            version=slot.version,
            created_at=slot.created_at,
            updated_at=slot.updated_at,
        )
