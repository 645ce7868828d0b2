"""
Scheduling API Schemas

Pydantic schemas for API request/response validation. JSON uses camelCase
keys; requests also accept the snake_case field names.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SchedulingSchema(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ==================== Requests ====================


class CreateBookingRequest(SchedulingSchema):
    """Booking request schema."""

    patient_id: UUID
    slot_id: UUID
    reason: str | None = Field(default=None, max_length=2000)


class UpdateBookingRequest(SchedulingSchema):
    """Partial booking update. At least one field is required."""

    status: str | None = None
    reason: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def check_not_empty(self) -> "UpdateBookingRequest":
        if self.status is None and self.reason is None:
            raise ValueError("Provide at least one of: status, reason")
        return self


class RescheduleBookingRequest(SchedulingSchema):
    """Reschedule request schema."""

    new_slot_id: UUID
    reason: str | None = Field(default=None, max_length=2000)


class CreateSlotRequest(SchedulingSchema):
    """Slot creation request schema."""

    resource_id: UUID
    start_time: datetime
    end_time: datetime


# ==================== Responses ====================


class PartyResponse(SchedulingSchema):
    id: UUID
    name: str
    email: str | None = None


class BookingSlotResponse(SchedulingSchema):
    id: UUID
    start_time: datetime
    end_time: datetime
    status: str


class BookingResponse(SchedulingSchema):
    """Booking response schema."""

    id: UUID
    status: str
    reason: str | None = None
    is_walk_in: bool = False
    patient: PartyResponse
    resource: PartyResponse | None = None
    slot: BookingSlotResponse | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CancellationResponse(SchedulingSchema):
    """Cancellation confirmation schema."""

    message: str
    booking_id: UUID
    slot_id: UUID | None = None


class SlotResponse(SchedulingSchema):
    """Slot response schema."""

    id: UUID
    resource_id: UUID
    start_time: datetime
    end_time: datetime
    status: str
    version: int


class ClinicianResponse(SchedulingSchema):
    """Bookable resource schema."""

    id: UUID
    first_name: str
    last_name: str
    display_name: str
    email: str | None = None
