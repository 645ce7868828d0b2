"""
Domain event base.

Events are frozen facts raised after a transaction commits and handed to
notification adapters. ``to_dict`` flattens one into JSON-safe primitives.
"""

from abc import ABC
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass(frozen=True)
class DomainEvent(ABC):
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        payload = {"event_type": self.event_type}
        for f in fields(self):
            payload[f.name] = _plain(getattr(self, f.name))
        return payload
