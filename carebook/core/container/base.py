"""
Base Container - Shared Singletons.

Single Responsibility: Manage shared resources (settings, notification delivery).
"""

import logging

from carebook.config.settings import get_settings
from carebook.domains.scheduling.application.ports import INotificationDispatcher
from carebook.domains.scheduling.application.services.notification_publisher import NotificationPublisher
from carebook.domains.scheduling.infrastructure.notifications import (
    DatabaseNotificationDispatcher,
    LoggingNotificationDispatcher,
)

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared singletons.

    Single Responsibility: Create and cache resources shared across requests.
    """

    def __init__(self, config: dict | None = None):
        """
        Initialize base container.

        Args:
            config: Optional configuration dict (overrides settings)
        """
        self.settings = get_settings()
        self.config = config or {}

        self._dispatcher_instance: INotificationDispatcher | None = None
        self._publisher_instance: NotificationPublisher | None = None

        logger.info("BaseContainer initialized")

    def get_notification_dispatcher(self) -> INotificationDispatcher:
        """
        Get notification dispatcher (singleton).

        NOTIFICATION_BACKEND=database stores in-app notifications on a
        dedicated session; NOTIFICATION_BACKEND=log only writes to the log.
        """
        if self._dispatcher_instance is None:
            backend = self.config.get("notification_backend", self.settings.NOTIFICATION_BACKEND)
            if backend == "database":
                from carebook.database.async_db import AsyncSessionLocal

                self._dispatcher_instance = DatabaseNotificationDispatcher(AsyncSessionLocal)
            else:
                self._dispatcher_instance = LoggingNotificationDispatcher()
            logger.info(f"Notification dispatcher created: {type(self._dispatcher_instance).__name__}")
        return self._dispatcher_instance

    def get_notification_publisher(self) -> NotificationPublisher:
        """Get notification publisher (singleton)."""
        if self._publisher_instance is None:
            enabled = self.config.get("notifications_enabled", self.settings.NOTIFICATIONS_ENABLED)
            self._publisher_instance = NotificationPublisher(
                self.get_notification_dispatcher(),
                enabled=enabled,
            )
        return self._publisher_instance
