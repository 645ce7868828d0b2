"""
Scheduling Domain Value Objects
"""

from carebook.domains.scheduling.domain.value_objects.scheduling_status import (
    BookingStatus,
    SlotStatus,
    UserRole,
)
from carebook.domains.scheduling.domain.value_objects.time_range import (
    FALLBACK_APPOINTMENT_DATE,
    TimeRange,
    format_appointment_date,
)

__all__ = [
    "BookingStatus",
    "SlotStatus",
    "UserRole",
    "TimeRange",
    "FALLBACK_APPOINTMENT_DATE",
    "format_appointment_date",
]
