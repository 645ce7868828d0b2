"""
User Repository Implementation

Read-only SQLAlchemy access to the users table.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carebook.domains.scheduling.application.ports import IUserRepository
from carebook.domains.scheduling.domain.entities import Person
from carebook.domains.scheduling.domain.value_objects import UserRole
from carebook.domains.scheduling.infrastructure.persistence.sqlalchemy.models import UserModel


class SQLAlchemyUserRepository(IUserRepository):
    """SQLAlchemy implementation of the user directory."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, user_id: UUID) -> Person | None:
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_ids(self, user_ids: list[UUID]) -> dict[UUID, Person]:
        ids = {user_id for user_id in user_ids if user_id is not None}
        if not ids:
            return {}
        result = await self.session.execute(select(UserModel).where(UserModel.id.in_(ids)))
        return {model.id: self._to_entity(model) for model in result.scalars().all()}

    async def list_clinicians(self) -> list[Person]:
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.role == UserRole.CLINICIAN.value, UserModel.is_active.is_(True))
            .order_by(UserModel.last_name, UserModel.first_name)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: UserModel) -> Person:
        return Person(
            id=model.id,
            first_name=model.first_name or "",
            last_name=model.last_name or "",
            email=model.email,
            phone_number=model.phone_number,
            role=UserRole.from_string(model.role) if model.role else UserRole.PATIENT,
        )
