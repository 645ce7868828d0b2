"""
Notification dispatcher adapters.
"""

from carebook.domains.scheduling.infrastructure.notifications.database_dispatcher import (
    DatabaseNotificationDispatcher,
)
from carebook.domains.scheduling.infrastructure.notifications.logging_dispatcher import (
    LoggingNotificationDispatcher,
)

__all__ = ["DatabaseNotificationDispatcher", "LoggingNotificationDispatcher"]
