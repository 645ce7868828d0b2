"""
Time Range Value Object

Half-open interval [start, end) used for slots.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from carebook.core.domain import ValidationException, ValueObject

FALLBACK_APPOINTMENT_DATE = "your scheduled time"


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    Half-open time interval.

    Two ranges that merely touch (one ends where the other starts) do not
    overlap.
    """

    start: datetime
    end: datetime

    def _validate(self) -> None:
        if self.start is None or self.end is None:
            raise ValidationException("Both start and end time are required", field="time_range")
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValidationException(
                "Start and end time must both be timezone-aware or both naive", field="time_range"
            )
        if self.end <= self.start:
            raise ValidationException("End time must be after start time", field="end_time")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    @classmethod
    def for_day(cls, day: date, tzinfo=None) -> "TimeRange":
        """Range covering a whole calendar day."""
        start = datetime.combine(day, time.min, tzinfo=tzinfo)
        return cls(start=start, end=start + timedelta(days=1))

    def __str__(self) -> str:
        return f"[{self.start.isoformat()}, {self.end.isoformat()})"


_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_appointment_date(moment: datetime | None, fallback: str = FALLBACK_APPOINTMENT_DATE) -> str:
    """
    Human-readable appointment date, e.g. "Monday, January 15, 2024".

    Day and month names come from the English tables above rather than
    strftime ``%A``/``%B``, which follow the process locale. Notification
    text stays the same whatever locale the server runs under.
    """
    if moment is None:
        return fallback
    return f"{_WEEKDAYS[moment.weekday()]}, {_MONTHS[moment.month - 1]} {moment.day}, {moment.year}"
