"""
User Directory Port

Read-only access to the identity store.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from carebook.domains.scheduling.domain.entities import Person


@runtime_checkable
class IUserRepository(Protocol):
    """User lookup interface. Patients and clinicians share the users table."""

    async def find_by_id(self, user_id: UUID) -> Person | None:
        ...

    async def find_by_ids(self, user_ids: list[UUID]) -> dict[UUID, Person]:
        """Batch lookup; unknown ids are absent from the result."""
        ...

    async def list_clinicians(self) -> list[Person]:
        ...
