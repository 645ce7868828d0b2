"""
Identity-bearing domain objects.

Scheduling records (slots, bookings, people) carry a UUID id plus audit
timestamps. Aggregates add a row version.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, TypeVar
from uuid import UUID, uuid4

TId = TypeVar("TId")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class Entity(ABC, Generic[TId]):
    """
    Base for records with identity.

    Subclasses declared with ``@dataclass`` get field-wise equality and
    ``__hash__ = None``; key collections by ``.id``.
    """

    id: TId | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def touch(self) -> None:
        """Stamp ``updated_at`` after a state change."""
        self.updated_at = _utcnow()


@dataclass
class AggregateRoot(Entity[TId], Generic[TId]):
    """Entity that owns a row version, bumped by every conditional write."""

    version: int = 0

    def increment_version(self) -> None:
        self.version += 1


def generate_uuid() -> UUID:
    return uuid4()
