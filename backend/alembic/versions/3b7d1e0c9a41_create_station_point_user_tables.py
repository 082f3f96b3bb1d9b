"""create_station_point_user_tables

Revision ID: 3b7d1e0c9a41
Revises:
Create Date: 2026-03-02 10:14:08.512339

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3b7d1e0c9a41"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create station, charging_point and app_user tables."""
    op.create_table(
        "station",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("address_street", sa.String(length=255), nullable=False),
        sa.Column("address_civic_num", sa.String(length=16), nullable=True),
        sa.Column("address_city", sa.String(length=128), nullable=False),
        sa.Column("address_municipality", sa.String(length=128), nullable=True),
        sa.Column("address_zipcode", sa.String(length=16), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "charging_point",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("station_id", sa.Integer(), nullable=False),
        sa.Column("slots_num", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("state", sa.String(length=16), nullable=False, server_default="available"),
        sa.CheckConstraint("slots_num >= 1", name="ck_charging_point_slots_num_positive"),
        sa.CheckConstraint(
            "state IN ('available', 'reserved', 'maintenance')",
            name="ck_charging_point_state",
        ),
        sa.ForeignKeyConstraint(["station_id"], ["station.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_charging_point_station_id", "charging_point", ["station_id"])
    op.create_table(
        "app_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )


def downgrade() -> None:
    """Drop app_user, charging_point and station tables."""
    op.drop_table("app_user", if_exists=True)
    op.drop_index("ix_charging_point_station_id", table_name="charging_point")
    op.drop_table("charging_point", if_exists=True)
    op.drop_table("station", if_exists=True)
