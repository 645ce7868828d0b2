"""
Notification Publisher

Hands committed appointment events to the notification dispatcher without
blocking the request. Failures are logged and never retried.
"""

import asyncio
import logging
from collections.abc import Iterable

from carebook.domains.scheduling.application.ports import INotificationDispatcher
from carebook.domains.scheduling.domain.events import AppointmentEvent

logger = logging.getLogger(__name__)

# In-flight delivery tasks, removed as each one finishes.
_pending_tasks: set[asyncio.Task] = set()


class NotificationPublisher:
    """
    Fire-and-forget delivery of appointment events.

    Example:
        ```python
        publisher = NotificationPublisher(LoggingNotificationDispatcher())
        publisher.publish([event])  # returns immediately
        ```
    """

    def __init__(self, dispatcher: INotificationDispatcher, enabled: bool = True):
        self.dispatcher = dispatcher
        self.enabled = enabled

    async def _deliver(self, event: AppointmentEvent) -> None:
        try:
            await self.dispatcher.dispatch(event)
            logger.debug(f"Delivered {event.event_type} for booking {event.booking_id} to {event.recipient_id}")
        except Exception as e:
            logger.warning(
                f"Failed to deliver {event.event_type} for booking {event.booking_id} "
                f"to {event.recipient_id}: {e}"
            )

    def publish(self, events: Iterable[AppointmentEvent]) -> list[asyncio.Task]:
        """
        Schedule delivery of each event as a background task.

        Must be called after the transaction that produced the events commits.
        """
        if not self.enabled:
            return []

        tasks = []
        for event in events:
            task = asyncio.create_task(self._deliver(event))
            _pending_tasks.add(task)
            task.add_done_callback(_pending_tasks.discard)
            tasks.append(task)
        return tasks


def pending_notification_count() -> int:
    return len(_pending_tasks)


async def drain_pending_notifications(timeout: float = 5.0) -> None:
    """Wait for in-flight deliveries, cancelling whatever is left after ``timeout``."""
    if not _pending_tasks:
        return

    tasks = list(_pending_tasks)
    logger.info(f"Waiting for {len(tasks)} pending notification(s)")
    _, still_running = await asyncio.wait(tasks, timeout=timeout)
    for task in still_running:
        task.cancel()
    if still_running:
        logger.warning(f"Cancelled {len(still_running)} notification(s) still pending at shutdown")
