"""
Scheduling Domain Repositories

SQLAlchemy implementations of the scheduling ports.
"""

from carebook.domains.scheduling.infrastructure.repositories.booking_repository import (
    SQLAlchemyBookingRepository,
)
from carebook.domains.scheduling.infrastructure.repositories.slot_repository import (
    SQLAlchemySlotRepository,
)
from carebook.domains.scheduling.infrastructure.repositories.user_repository import (
    SQLAlchemyUserRepository,
)

__all__ = [
    "SQLAlchemyBookingRepository",
    "SQLAlchemySlotRepository",
    "SQLAlchemyUserRepository",
]
