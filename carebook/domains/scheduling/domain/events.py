"""
Scheduling Domain Events

Published after a booking transaction commits. Each event targets a single
recipient (the patient or the clinician owning the slot) and renders its own
title and message.
"""

from dataclasses import dataclass
from uuid import UUID

from carebook.core.domain import DomainEvent

from .value_objects import FALLBACK_APPOINTMENT_DATE, UserRole

NOTIFICATION_TYPE = "appointment"
REFERENCE_TYPE = "booking"

FALLBACK_DOCTOR_NAME = "your doctor"
FALLBACK_PATIENT_NAME = "Patient"
FALLBACK_RESCHEDULED_DATE = "your new scheduled time"


@dataclass(frozen=True)
class AppointmentEvent(DomainEvent):
    """Base event for booking side effects."""

    recipient_id: UUID | None = None
    recipient_role: UserRole = UserRole.PATIENT
    counterparty_name: str = ""
    appointment_date: str = FALLBACK_APPOINTMENT_DATE
    booking_id: UUID | None = None
    slot_id: UUID | None = None
    reason: str | None = None

    @property
    def notification_type(self) -> str:
        return NOTIFICATION_TYPE

    @property
    def reference_type(self) -> str:
        return REFERENCE_TYPE

    @property
    def for_clinician(self) -> bool:
        return self.recipient_role == UserRole.CLINICIAN

    @property
    def title(self) -> str:
        raise NotImplementedError

    @property
    def message(self) -> str:
        raise NotImplementedError

    def _reason_suffix(self) -> str:
        return f" Reason: {self.reason}" if self.reason else ""


@dataclass(frozen=True)
class AppointmentBooked(AppointmentEvent):
    """A booking was created and its slot claimed."""

    @property
    def title(self) -> str:
        return "New Appointment Booked" if self.for_clinician else "Appointment Confirmed"

    @property
    def message(self) -> str:
        if self.for_clinician:
            return f"New appointment with {self.counterparty_name} on {self.appointment_date}."
        return (
            f"Your appointment with {self.counterparty_name} on {self.appointment_date} "
            "has been confirmed."
        )


@dataclass(frozen=True)
class AppointmentCancelled(AppointmentEvent):
    """A booking was cancelled and its slot released."""

    @property
    def title(self) -> str:
        return "Appointment Cancelled"

    @property
    def message(self) -> str:
        if self.for_clinician:
            return (
                f"Appointment with {self.counterparty_name} on {self.appointment_date} "
                "has been cancelled."
            )
        return (
            f"Your appointment with {self.counterparty_name} on {self.appointment_date} "
            "has been cancelled."
        )


@dataclass(frozen=True)
class AppointmentRescheduled(AppointmentEvent):
    """A booking moved to a new slot. ``appointment_date`` is the new date."""

    @property
    def title(self) -> str:
        return "Appointment Rescheduled"

    @property
    def message(self) -> str:
        if self.for_clinician:
            return (
                f"Appointment with {self.counterparty_name} has been rescheduled to "
                f"{self.appointment_date}.{self._reason_suffix()}"
            )
        return (
            f"Your appointment with {self.counterparty_name} has been rescheduled to "
            f"{self.appointment_date}.{self._reason_suffix()}"
        )
