"""Initial schema

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 10:30:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


role_enum = sa.Enum("user", "owner", "admin", name="role_enum", native_enum=False)
booking_status_enum = sa.Enum(
    "pending",
    "confirmed",
    "cancelled",
    "completed",
    name="booking_status_enum",
    native_enum=False,
)
payment_status_enum = sa.Enum("pending", "paid", "refunded", name="payment_status_enum", native_enum=False)


def _id_col() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False)


def _created_col() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _updated_col() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)


def upgrade() -> None:
    op.create_table(
        "users",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("role", role_enum, nullable=False),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=False)
    op.create_index("ix_users_role", "users", ["role"], unique=False)

    op.create_table(
        "venues",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_approved", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], name="fk_venues_owner_id_users", ondelete="CASCADE"),
    )
    op.create_index("ix_venues_owner_id", "venues", ["owner_id"], unique=False)

    op.create_table(
        "courts",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("venue_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("sport", sa.String(length=64), nullable=False),
        sa.Column("price_per_hour", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["venue_id"], ["venues.id"], name="fk_courts_venue_id_venues", ondelete="CASCADE"),
    )
    op.create_index("ix_courts_venue_id", "courts", ["venue_id"], unique=False)

    op.create_table(
        "weekly_slot_templates",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("court_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("day_of_week", sa.SmallInteger(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False),
        sa.Column("is_maintenance", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["court_id"],
            ["courts.id"],
            name="fk_weekly_slot_templates_court_id_courts",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "court_id",
            "day_of_week",
            "start_time",
            "end_time",
            name="uq_weekly_slot_templates_court_day_interval",
        ),
        sa.CheckConstraint(
            "day_of_week BETWEEN 0 AND 6",
            name="ck_weekly_slot_templates_day_of_week_range",
        ),
        sa.CheckConstraint(
            "start_time < end_time",
            name="ck_weekly_slot_templates_interval_order",
        ),
    )
    op.create_index("ix_weekly_slot_templates_court_id", "weekly_slot_templates", ["court_id"], unique=False)

    op.create_table(
        "bookings",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("court_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", booking_status_enum, nullable=False),
        sa.Column("payment_status", payment_status_enum, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_bookings_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["court_id"], ["courts.id"], name="fk_bookings_court_id_courts", ondelete="CASCADE"),
    )
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"], unique=False)
    op.create_index("ix_bookings_status", "bookings", ["status"], unique=False)
    op.create_index("ix_bookings_court_id_booking_date", "bookings", ["court_id", "booking_date"], unique=False)

    op.create_table(
        "booking_slots",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.ForeignKeyConstraint(
            ["booking_id"],
            ["bookings.id"],
            name="fk_booking_slots_booking_id_bookings",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint("start_time < end_time", name="ck_booking_slots_interval_order"),
    )
    op.create_index("ix_booking_slots_booking_id", "booking_slots", ["booking_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_booking_slots_booking_id", table_name="booking_slots")
    op.drop_table("booking_slots")

    op.drop_index("ix_bookings_court_id_booking_date", table_name="bookings")
    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_index("ix_bookings_user_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_weekly_slot_templates_court_id", table_name="weekly_slot_templates")
    op.drop_table("weekly_slot_templates")

    op.drop_index("ix_courts_venue_id", table_name="courts")
    op.drop_table("courts")

    op.drop_index("ix_venues_owner_id", table_name="venues")
    op.drop_table("venues")

    op.drop_index("ix_users_role", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
