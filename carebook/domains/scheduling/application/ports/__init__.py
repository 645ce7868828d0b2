"""
Scheduling Domain Ports

Interfaces (ports) for the scheduling domain following Clean Architecture.
"""

from carebook.domains.scheduling.application.ports.booking_repository import IBookingRepository
from carebook.domains.scheduling.application.ports.notification_dispatcher import INotificationDispatcher
from carebook.domains.scheduling.application.ports.slot_repository import ISlotRepository
from carebook.domains.scheduling.application.ports.user_repository import IUserRepository

__all__ = [
    "IBookingRepository",
    "INotificationDispatcher",
    "ISlotRepository",
    "IUserRepository",
]
