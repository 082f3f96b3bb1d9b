"""ChargingLog model for DB persistence."""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base

LOG_IN_PROGRESS = "in_progress"
LOG_COMPLETED = "completed"


class ChargingLog(Base):
    """charging_log table: one charging session per booking. Energy (kWh) and cost come from the caller."""

    __tablename__ = "charging_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("booking.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    charging_point_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("charging_point.id", ondelete="CASCADE"),
        nullable=False,
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=LOG_IN_PROGRESS)
    energy_consumed: Mapped[float | None] = mapped_column(Numeric(10, 3), nullable=True)
    cost: Mapped[float | None] = mapped_column(Numeric(10, 2), nullable=True)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="charging_log")
