"""
List Clinicians Use Case
"""

from dataclasses import dataclass
from uuid import UUID

from carebook.domains.scheduling.application.ports import IUserRepository


@dataclass
class ClinicianSummary:
    """Bookable resource as listed to patients"""

    id: UUID
    first_name: str
    last_name: str
    display_name: str
    email: str | None = None


class ListCliniciansUseCase:
    """Resources patients can book against, sorted by last name."""

    def __init__(self, user_repository: IUserRepository):
        self.user_repo = user_repository

    async def execute(self) -> list[ClinicianSummary]:
        clinicians = await self.user_repo.list_clinicians()
        return [
            ClinicianSummary(
                id=c.id,
                first_name=c.first_name,
                last_name=c.last_name,
                display_name=c.doctor_name,
                email=c.email,
            )
            for c in sorted(clinicians, key=lambda c: (c.last_name, c.first_name))
        ]
