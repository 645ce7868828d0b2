"""
Slot Entity for Scheduling Domain

A bookable time interval owned by one resource (clinician).
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from carebook.core.domain import AggregateRoot

from ..value_objects import SlotStatus, TimeRange


@dataclass
class Slot(AggregateRoot[UUID]):
    """
    Slot aggregate root.

    Slot status is only ever changed by the SlotAllocator, through
    conditional writes on the storage layer. The entity is a read snapshot
    of the row and carries no status mutators.
    """

    resource_id: UUID | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: SlotStatus = SlotStatus.AVAILABLE

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start_time, end=self.end_time)

    def is_available(self) -> bool:
        return self.status.is_claimable()

    def overlaps(self, other: TimeRange) -> bool:
        return self.time_range.overlaps(other)

    @classmethod
    def create(cls, resource_id: UUID, start_time: datetime, end_time: datetime) -> "Slot":
        """Build a new Available slot, validating the interval."""
        time_range = TimeRange(start=start_time, end=end_time)
        return cls(
            resource_id=resource_id,
            start_time=time_range.start,
            end_time=time_range.end,
            status=SlotStatus.AVAILABLE,
        )

    def __str__(self) -> str:
        return f"Slot({self.id}, {self.status.value}, {self.start_time} - {self.end_time})"
