"""
Database Notification Dispatcher

Persists appointment events as in-app notifications. Runs after the booking
transaction has committed, on its own session.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from carebook.domains.scheduling.application.ports import INotificationDispatcher
from carebook.domains.scheduling.domain.events import AppointmentEvent
from carebook.domains.scheduling.infrastructure.persistence.sqlalchemy.models import NotificationModel

logger = logging.getLogger(__name__)


class DatabaseNotificationDispatcher(INotificationDispatcher):
    """Writes one row to ``notifications`` per event."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def dispatch(self, event: AppointmentEvent) -> None:
        async with self.session_factory() as session:
            session.add(
                NotificationModel(
                    user_id=event.recipient_id,
                    type=event.notification_type,
                    title=event.title,
                    message=event.message,
                    reference_id=event.booking_id,
                    reference_type=event.reference_type,
                    is_read=False,
                )
            )
            await session.commit()

        logger.debug(f"Notification '{event.title}' stored for user {event.recipient_id}")
