"""
Scheduling Domain Entities
"""

from carebook.domains.scheduling.domain.entities.booking import Booking
from carebook.domains.scheduling.domain.entities.person import Person
from carebook.domains.scheduling.domain.entities.slot import Slot

__all__ = [
    "Booking",
    "Person",
    "Slot",
]
