"""
Value object base and string-backed status enums.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Self


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable, compared by value. Subclasses check their invariants in ``_validate``."""

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        return None


class StatusEnum(str, Enum):
    """Status stored as its display string ("Available", "Pending", ...)."""

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Case-insensitive lookup by value; raises ValueError on unknown input."""
        wanted = value.strip().lower()
        match = next((member for member in cls if member.value.lower() == wanted), None)
        if match is None:
            raise ValueError(f"Unknown {cls.__name__} '{value}'")
        return match
