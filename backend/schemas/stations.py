"""Pydantic schemas for station and charging point API."""
from typing import Literal

from pydantic import BaseModel


class StationResponse(BaseModel):
    """Station in API responses."""

    station_id: int
    address_street: str
    address_civic_num: str | None = None
    address_city: str
    address_municipality: str | None = None
    address_zipcode: str | None = None
    charging_point_count: int = 0


class ChargingPointResponse(BaseModel):
    """Charging point as consumed by the booking form's point dropdown."""

    charging_point_id: int
    station_id: int
    slots_num: int
    state: str


class ChargingPointDetail(ChargingPointResponse):
    """Charging point with its station address."""

    station: StationResponse


class ChargingPointStateUpdate(BaseModel):
    """Staff payload for toggling maintenance on a charging point."""

    state: Literal["available", "maintenance"]


class AvailabilityResponse(BaseModel):
    """Result of an availability check for one interval."""

    charging_point_id: int
    date: str
    start_time: str
    end_time: str
    available: bool


class TimeSlot(BaseModel):
    """One slot of the daily booking grid."""

    start: str
    end: str
    available: bool


class TimeSlotsResponse(BaseModel):
    """Daily slot grid for a charging point."""

    charging_point_id: int
    date: str
    slots: list[TimeSlot]
