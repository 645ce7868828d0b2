"""
Person Entity

Read-only projection of a user record (patient or clinician). Identity
management lives outside this service.
"""

from dataclasses import dataclass
from uuid import UUID

from carebook.core.domain import Entity

from ..value_objects import UserRole

DOCTOR_PREFIX = "Dr."


@dataclass
class Person(Entity[UUID]):
    """A patient or clinician as seen by the scheduling core."""

    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone_number: str | None = None
    role: UserRole = UserRole.PATIENT

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def doctor_name(self) -> str:
        """Name with a single "Dr." prefix, as shown to patients."""
        if self.first_name.startswith(DOCTOR_PREFIX):
            return self.full_name
        return f"{DOCTOR_PREFIX} {self.full_name}"

    def is_clinician(self) -> bool:
        return self.role == UserRole.CLINICIAN
