"""create_booking_and_charging_log

Interval bookings (date + start_time + end_time) with a partial unique index so two
live bookings cannot claim the same start on the same point and day.

Revision ID: 8f2c6a5d4e17
Revises: 3b7d1e0c9a41
Create Date: 2026-03-02 11:40:52.118904

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8f2c6a5d4e17"
down_revision: Union[str, Sequence[str], None] = "3b7d1e0c9a41"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create booking and charging_log tables."""
    op.create_table(
        "booking",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("charging_point_id", sa.Integer(), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="scheduled"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("end_time > start_time", name="ck_booking_interval"),
        sa.CheckConstraint(
            "status IN ('scheduled', 'active', 'cancelled')",
            name="ck_booking_status",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["charging_point_id"], ["charging_point.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_booking_user_id", "booking", ["user_id"])
    op.create_index("ix_booking_point_date", "booking", ["charging_point_id", "booking_date"])
    op.create_index(
        "uq_booking_live_slot",
        "booking",
        ["charging_point_id", "booking_date", "start_time"],
        unique=True,
        sqlite_where=sa.text("status != 'cancelled'"),
        postgresql_where=sa.text("status != 'cancelled'"),
    )
    op.create_table(
        "charging_log",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("booking_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("charging_point_id", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="in_progress"),
        sa.Column("energy_consumed", sa.Numeric(10, 3), nullable=True),
        sa.Column("cost", sa.Numeric(10, 2), nullable=True),
        sa.ForeignKeyConstraint(["booking_id"], ["booking.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["charging_point_id"], ["charging_point.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("booking_id"),
    )


def downgrade() -> None:
    """Drop charging_log and booking tables."""
    op.drop_table("charging_log", if_exists=True)
    op.drop_index("uq_booking_live_slot", table_name="booking")
    op.drop_index("ix_booking_point_date", table_name="booking")
    op.drop_index("ix_booking_user_id", table_name="booking")
    op.drop_table("booking", if_exists=True)
