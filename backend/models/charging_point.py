"""ChargingPoint model for DB persistence."""
from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base

STATE_AVAILABLE = "available"
STATE_RESERVED = "reserved"
STATE_MAINTENANCE = "maintenance"
CHARGING_POINT_STATES = (STATE_AVAILABLE, STATE_RESERVED, STATE_MAINTENANCE)


class ChargingPoint(Base):
    """charging_point table: one bookable socket/bay at a station.

    state is `reserved` while the point has scheduled/active bookings and `available`
    otherwise; `maintenance` is only set and cleared explicitly.
    """

    __tablename__ = "charging_point"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    station_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("station.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    slots_num: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    state: Mapped[str] = mapped_column(String(16), nullable=False, default=STATE_AVAILABLE)

    station: Mapped["Station"] = relationship("Station", back_populates="charging_points")

    __table_args__ = (
        CheckConstraint("slots_num >= 1", name="ck_charging_point_slots_num_positive"),
        CheckConstraint(
            "state IN ('available', 'reserved', 'maintenance')",
            name="ck_charging_point_state",
        ),
    )
