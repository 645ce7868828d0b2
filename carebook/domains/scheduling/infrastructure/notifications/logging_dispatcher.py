"""
Logging Notification Dispatcher

Development adapter: writes notifications to the application log only.
"""

import logging

from carebook.domains.scheduling.application.ports import INotificationDispatcher
from carebook.domains.scheduling.domain.events import AppointmentEvent

logger = logging.getLogger(__name__)


class LoggingNotificationDispatcher(INotificationDispatcher):
    async def dispatch(self, event: AppointmentEvent) -> None:
        logger.info(
            f"[{event.event_type}] to {event.recipient_id}: {event.title} - {event.message}",
            extra={"extra_data": event.to_dict()},
        )
