"""Scheduling baseline: slots, bookings and notifications.

Revision ID: 001_scheduling_baseline
Revises:
Create Date: 2026-10-19

This migration:
1. Enables btree_gist for the per-resource overlap exclusion
2. Creates users (when the identity store has not already)
3. Creates appt_slots with the no-overlap exclusion constraint
4. Creates appt_bookings with one active booking per slot
5. Creates notifications
"""

from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_scheduling_baseline"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create scheduling tables and constraints."""
    # 1. Extension for mixing = and && in one GiST exclusion
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist;")

    # 2. Users (read-only for this service)
    op.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id UUID PRIMARY KEY,
            first_name VARCHAR(100) NOT NULL,
            last_name VARCHAR(100) NOT NULL,
            email VARCHAR(255) UNIQUE,
            phone_number VARCHAR(30),
            role VARCHAR(20) NOT NULL DEFAULT 'patient',
            is_active BOOLEAN NOT NULL DEFAULT TRUE
        );
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_users_role ON users (role);")

    # 3. Slots
    op.execute("""
        CREATE TABLE appt_slots (
            id UUID PRIMARY KEY,
            resource_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            start_time TIMESTAMPTZ NOT NULL,
            end_time TIMESTAMPTZ NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'Available',
            version INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT ck_appt_slots_time_order CHECK (end_time > start_time),
            CONSTRAINT ck_appt_slots_status CHECK (status IN ('Available', 'Booked', 'Blocked')),
            CONSTRAINT ex_appt_slots_no_overlap EXCLUDE USING gist (
                resource_id WITH =,
                tstzrange(start_time, end_time, '[)') WITH &&
            )
        );
    """)
    op.execute("CREATE INDEX idx_appt_slots_resource_start ON appt_slots (resource_id, start_time);")
    op.execute("""
        CREATE INDEX idx_appt_slots_available
        ON appt_slots (resource_id, start_time)
        WHERE status = 'Available';
    """)

    # 4. Bookings
    op.execute("""
        CREATE TABLE appt_bookings (
            id UUID PRIMARY KEY,
            patient_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            slot_id UUID REFERENCES appt_slots(id) ON DELETE SET NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'Pending',
            reason TEXT,
            is_walk_in BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT ck_appt_bookings_status
                CHECK (status IN ('Pending', 'Confirmed', 'Cancelled', 'Completed'))
        );
    """)
    op.execute("CREATE INDEX ix_appt_bookings_patient_id ON appt_bookings (patient_id);")
    op.execute("CREATE INDEX ix_appt_bookings_slot_id ON appt_bookings (slot_id);")
    op.execute("""
        CREATE UNIQUE INDEX uq_appt_bookings_active_slot
        ON appt_bookings (slot_id)
        WHERE status IN ('Pending', 'Confirmed');
    """)

    # 5. Notifications
    op.execute("""
        CREATE TABLE notifications (
            id UUID PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            type VARCHAR(30) NOT NULL,
            title VARCHAR(255) NOT NULL,
            message TEXT NOT NULL,
            reference_id UUID,
            reference_type VARCHAR(30),
            is_read BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)
    op.execute("CREATE INDEX ix_notifications_user_id ON notifications (user_id);")


def downgrade() -> None:
    """Drop scheduling tables. Users and the extension are left in place."""
    op.execute("DROP TABLE IF EXISTS notifications;")
    op.execute("DROP TABLE IF EXISTS appt_bookings;")
    op.execute("DROP TABLE IF EXISTS appt_slots;")
