"""
Scheduling SQLAlchemy Models

Database models for scheduling domain persistence. Status columns store the
string values of SlotStatus / BookingStatus.
"""

import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from carebook.models.db.base import Base, TimestampMixin


class UserModel(Base):
    """
    Read-only mapping of the identity store's users table.

    Only the columns the scheduling core reads are mapped.
    """

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True, unique=True)
    phone_number = Column(String(30), nullable=True)
    role = Column(String(20), nullable=False, default="patient", index=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role='{self.role}')>"


class SlotModel(Base, TimestampMixin):
    """SQLAlchemy model for Slot entity."""

    __tablename__ = "appt_slots"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    resource_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="Available", server_default="Available")
    version = Column(Integer, nullable=False, default=0, server_default="0")

    # Overlap exclusion per resource (btree_gist) is created by migration 001.
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_appt_slots_time_order"),
        CheckConstraint(
            "status IN ('Available', 'Booked', 'Blocked')",
            name="ck_appt_slots_status",
        ),
        Index("idx_appt_slots_resource_start", "resource_id", "start_time"),
        Index(
            "idx_appt_slots_available",
            "resource_id",
            "start_time",
            postgresql_where=text("status = 'Available'"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Slot(id={self.id}, status='{self.status}', start={self.start_time})>"


class BookingModel(Base, TimestampMixin):
    """SQLAlchemy model for Booking entity."""

    __tablename__ = "appt_bookings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    patient_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    slot_id = Column(
        UUID(as_uuid=True),
        ForeignKey("appt_slots.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    status = Column(String(20), nullable=False, default="Pending", server_default="Pending")
    reason = Column(Text, nullable=True)
    is_walk_in = Column(Boolean, nullable=False, default=False, server_default="false")

    __table_args__ = (
        CheckConstraint(
            "status IN ('Pending', 'Confirmed', 'Cancelled', 'Completed')",
            name="ck_appt_bookings_status",
        ),
        # One active booking per slot
        Index(
            "uq_appt_bookings_active_slot",
            "slot_id",
            unique=True,
            postgresql_where=text("status IN ('Pending', 'Confirmed')"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, status='{self.status}', slot={self.slot_id})>"


class NotificationModel(Base):
    """In-app notification written after a booking transaction commits."""

    __tablename__ = "notifications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String(30), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    reference_id = Column(UUID(as_uuid=True), nullable=True)
    reference_type = Column(String(30), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False, server_default="false")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=text("now()"))

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user={self.user_id}, title='{self.title}')>"
