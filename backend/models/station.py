"""Station model for DB persistence."""
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base


class Station(Base):
    """Station table: id and address fields. Reference data; not edited by booking code."""

    __tablename__ = "station"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    address_street: Mapped[str] = mapped_column(String(255), nullable=False)
    address_civic_num: Mapped[str | None] = mapped_column(String(16), nullable=True)
    address_city: Mapped[str] = mapped_column(String(128), nullable=False)
    address_municipality: Mapped[str | None] = mapped_column(String(128), nullable=True)
    address_zipcode: Mapped[str | None] = mapped_column(String(16), nullable=True)

    charging_points: Mapped[list["ChargingPoint"]] = relationship(
        "ChargingPoint",
        back_populates="station",
        cascade="all, delete-orphan",
        order_by="ChargingPoint.id",
    )
