"""
Scheduling Application Services
"""

from carebook.domains.scheduling.application.services.booking_lifecycle import (
    BookingLifecycleManager,
    parse_booking_status,
)
from carebook.domains.scheduling.application.services.notification_publisher import (
    NotificationPublisher,
    drain_pending_notifications,
)
from carebook.domains.scheduling.application.services.slot_allocator import SlotAllocator

__all__ = [
    "BookingLifecycleManager",
    "NotificationPublisher",
    "SlotAllocator",
    "drain_pending_notifications",
    "parse_booking_status",
]
