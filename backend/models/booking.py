"""Booking model for DB persistence."""
from datetime import date, datetime, time, timezone
from typing import Optional

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, Integer, String, Time, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base

STATUS_SCHEDULED = "scheduled"
STATUS_ACTIVE = "active"
STATUS_CANCELLED = "cancelled"
BOOKING_STATUSES = (STATUS_SCHEDULED, STATUS_ACTIVE, STATUS_CANCELLED)
# Bookings in these statuses hold their interval on the charging point.
HOLDING_STATUSES = (STATUS_SCHEDULED, STATUS_ACTIVE)


class Booking(Base):
    """booking table: a user's [start_time, end_time) interval on one charging point and date."""

    __tablename__ = "booking"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    charging_point_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("charging_point.id", ondelete="CASCADE"),
        nullable=False,
    )
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=STATUS_SCHEDULED)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User")
    charging_point: Mapped["ChargingPoint"] = relationship("ChargingPoint")
    charging_log: Mapped[Optional["ChargingLog"]] = relationship(
        "ChargingLog",
        back_populates="booking",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_booking_interval"),
        CheckConstraint(
            "status IN ('scheduled', 'active', 'cancelled')",
            name="ck_booking_status",
        ),
        Index("ix_booking_point_date", "charging_point_id", "booking_date"),
        # Two live bookings can never claim the same start on the same point and day,
        # even if both requests passed the overlap check concurrently.
        Index(
            "uq_booking_live_slot",
            "charging_point_id",
            "booking_date",
            "start_time",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )
