"""Station and charging point API routes."""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from db import get_db
from models.charging_point import STATE_MAINTENANCE, ChargingPoint
from models.station import Station
from repositories.booking_repository import is_charging_point_available, list_bookings_on_date
from repositories.station_repository import (
    count_charging_points,
    get_charging_point as repo_get_charging_point,
    get_station as repo_get_station,
    list_available_charging_points as repo_list_available_charging_points,
    list_charging_points as repo_list_charging_points,
    list_stations as repo_list_stations,
    set_charging_point_state as repo_set_charging_point_state,
)
from schemas.stations import (
    AvailabilityResponse,
    ChargingPointDetail,
    ChargingPointResponse,
    ChargingPointStateUpdate,
    StationResponse,
    TimeSlot,
    TimeSlotsResponse,
)
from utils.config import SLOT_DAY_END, SLOT_DAY_START, SLOT_MINUTES
from utils.time_slots import build_day_slots, format_hhmm, intervals_overlap, parse_hhmm

router = APIRouter(tags=["stations"])


def station_to_response(station: Station, charging_point_count: int = 0) -> StationResponse:
    """Build StationResponse from model instance."""
    return StationResponse(
        station_id=station.id,
        address_street=station.address_street,
        address_civic_num=station.address_civic_num,
        address_city=station.address_city,
        address_municipality=station.address_municipality,
        address_zipcode=station.address_zipcode,
        charging_point_count=charging_point_count,
    )


def _point_to_response(point: ChargingPoint) -> ChargingPointResponse:
    return ChargingPointResponse(
        charging_point_id=point.id,
        station_id=point.station_id,
        slots_num=point.slots_num,
        state=point.state,
    )


def _point_to_detail(db: Session, point: ChargingPoint) -> ChargingPointDetail:
    return ChargingPointDetail(
        charging_point_id=point.id,
        station_id=point.station_id,
        slots_num=point.slots_num,
        state=point.state,
        station=station_to_response(point.station, count_charging_points(db, point.station_id)),
    )


def _get_point_or_404(db: Session, charging_point_id: int) -> ChargingPoint:
    point = repo_get_charging_point(db, charging_point_id)
    if point is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Charging point not found")
    return point


def _parse_time_param(value: str, name: str):
    try:
        return parse_hhmm(value)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} must be HH:MM",
        ) from e


@router.get("/stations", response_model=list[StationResponse])
def list_stations(db: Session = Depends(get_db)) -> list[StationResponse]:
    """List all stations."""
    return [station_to_response(s, count_charging_points(db, s.id)) for s in repo_list_stations(db)]


@router.get("/stations/{station_id}", response_model=StationResponse)
def get_station(station_id: int, db: Session = Depends(get_db)) -> StationResponse:
    """Get one station."""
    station = repo_get_station(db, station_id)
    if station is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Station not found")
    return station_to_response(station, count_charging_points(db, station.id))


@router.get("/stations/{station_id}/charging-points", response_model=list[ChargingPointResponse])
def list_charging_points(
    station_id: int,
    available_only: bool = Query(default=False),
    db: Session = Depends(get_db),
) -> list[ChargingPointResponse]:
    """List the charging points of a station (feeds the booking form's point dropdown)."""
    if repo_get_station(db, station_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Station not found")
    if available_only:
        points = repo_list_available_charging_points(db, station_id)
    else:
        points = repo_list_charging_points(db, station_id)
    return [_point_to_response(p) for p in points]


@router.get("/charging-points/{charging_point_id}", response_model=ChargingPointDetail)
def get_charging_point(charging_point_id: int, db: Session = Depends(get_db)) -> ChargingPointDetail:
    """Get a charging point with its station."""
    return _point_to_detail(db, _get_point_or_404(db, charging_point_id))


@router.patch("/charging-points/{charging_point_id}", response_model=ChargingPointDetail)
def update_charging_point_state(
    charging_point_id: int,
    body: ChargingPointStateUpdate,
    db: Session = Depends(get_db),
) -> ChargingPointDetail:
    """Put a charging point into maintenance or back into service."""
    point = repo_set_charging_point_state(db, charging_point_id, body.state)
    if point is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Charging point not found")
    return _point_to_detail(db, point)


@router.get("/charging-points/{charging_point_id}/availability", response_model=AvailabilityResponse)
def check_availability(
    charging_point_id: int,
    date: date,
    start_time: str,
    end_time: str,
    db: Session = Depends(get_db),
) -> AvailabilityResponse:
    """Whether [start_time, end_time) on date can currently be booked."""
    _get_point_or_404(db, charging_point_id)
    start = _parse_time_param(start_time, "start_time")
    end = _parse_time_param(end_time, "end_time")
    if end <= start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_time must be after start_time",
        )
    return AvailabilityResponse(
        charging_point_id=charging_point_id,
        date=date.isoformat(),
        start_time=format_hhmm(start),
        end_time=format_hhmm(end),
        available=is_charging_point_available(db, charging_point_id, date, start, end),
    )


@router.get("/charging-points/{charging_point_id}/time-slots", response_model=TimeSlotsResponse)
def list_time_slots(
    charging_point_id: int,
    date: date,
    db: Session = Depends(get_db),
) -> TimeSlotsResponse:
    """The day's slot grid, each slot flagged with whether it is still bookable."""
    point = _get_point_or_404(db, charging_point_id)
    booked = list_bookings_on_date(db, charging_point_id, date)
    slots = []
    for start, end in build_day_slots(parse_hhmm(SLOT_DAY_START), parse_hhmm(SLOT_DAY_END), SLOT_MINUTES):
        free = point.state != STATE_MAINTENANCE and not any(
            intervals_overlap(start, end, b.start_time, b.end_time) for b in booked
        )
        slots.append(TimeSlot(start=format_hhmm(start), end=format_hhmm(end), available=free))
    return TimeSlotsResponse(charging_point_id=charging_point_id, date=date.isoformat(), slots=slots)
