"""
Notification Dispatcher Port

Outbound side-effect port invoked after a booking transaction commits.
"""

from typing import Protocol, runtime_checkable

from carebook.domains.scheduling.domain.events import AppointmentEvent


@runtime_checkable
class INotificationDispatcher(Protocol):
    """
    Delivers appointment events to their recipient.

    Delivery is at-most-once. Implementations may raise; callers log the
    failure and move on.
    """

    async def dispatch(self, event: AppointmentEvent) -> None:
        ...
