# Schemas package
from .bookings import BookingCreate, BookingResponse, ChargingLogResponse
from .health import HealthResponse
from .stations import ChargingPointResponse, StationResponse

__all__ = [
    "BookingCreate",
    "BookingResponse",
    "ChargingLogResponse",
    "ChargingPointResponse",
    "HealthResponse",
    "StationResponse",
]
