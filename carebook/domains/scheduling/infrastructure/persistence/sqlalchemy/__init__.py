from carebook.domains.scheduling.infrastructure.persistence.sqlalchemy.models import (
    BookingModel,
    NotificationModel,
    SlotModel,
    UserModel,
)

__all__ = ["BookingModel", "NotificationModel", "SlotModel", "UserModel"]
