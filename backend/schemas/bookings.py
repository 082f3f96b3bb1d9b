"""Pydantic schemas for booking and charging session API."""
from datetime import date, time

from pydantic import BaseModel, Field, field_validator, model_validator

from schemas.stations import StationResponse

BOOKING_FAILED_MESSAGE = "Failed to create booking. The selected time slot may no longer be available."


class BookingCreate(BaseModel):
    """Payload for creating a booking; times are local 'HH:MM'."""

    charging_point_id: int = Field(..., ge=1)
    date: date
    start_time: time
    end_time: time

    @field_validator("start_time", "end_time")
    @classmethod
    def _local_hhmm(cls, v: time) -> time:
        # Time columns are naive and responses are HH:MM.
        if v.tzinfo is not None:
            raise ValueError("times must be local HH:MM")
        if v.second or v.microsecond:
            raise ValueError("times must be whole minutes (HH:MM)")
        return v

    @model_validator(mode="after")
    def _end_after_start(self) -> "BookingCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ChargingLogResponse(BaseModel):
    """Charging session in API responses."""

    logs_id: int
    booking_id: int
    user_id: int
    charging_point_id: int
    start_time: str
    end_time: str | None = None
    status: str
    energy_consumed: float | None = None
    cost: float | None = None


class BookingResponse(BaseModel):
    """Booking in list/detail responses."""

    booking_id: int
    user_id: int
    charging_point_id: int
    date: str
    start_time: str
    end_time: str
    status: str
    station: StationResponse | None = None
    charging_log: ChargingLogResponse | None = None


class ChargingEndRequest(BaseModel):
    """Payload for closing a charging session; values come from the charger UI, not computed here."""

    energy_consumed: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)


class SessionLogin(BaseModel):
    """Payload for binding a user to the browser session."""

    user_id: int = Field(..., ge=1)


class SessionResponse(BaseModel):
    """Current session user."""

    user_id: int
    name: str
    email: str


class FlashMessage(BaseModel):
    """One-shot status message carried across a redirect."""

    category: str
    message: str
