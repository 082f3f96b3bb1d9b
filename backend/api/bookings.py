"""Booking API routes (JSON). All routes act on behalf of the session user."""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from api.deps import require_user_id
from api.stations import station_to_response
from db import get_db
from models.booking import Booking
from models.charging_log import ChargingLog
from repositories.booking_repository import (
    cancel_booking as repo_cancel_booking,
    create_booking as repo_create_booking,
    get_booking as repo_get_booking,
    get_booking_details as repo_get_booking_details,
    list_upcoming_bookings as repo_list_upcoming_bookings,
)
from schemas.bookings import BOOKING_FAILED_MESSAGE, BookingCreate, BookingResponse, ChargingLogResponse
from utils.time_slots import format_hhmm

router = APIRouter(prefix="/bookings", tags=["bookings"])


def log_to_response(log: ChargingLog) -> ChargingLogResponse:
    """Build ChargingLogResponse from model instance."""
    return ChargingLogResponse(
        logs_id=log.id,
        booking_id=log.booking_id,
        user_id=log.user_id,
        charging_point_id=log.charging_point_id,
        start_time=log.start_time.isoformat(),
        end_time=log.end_time.isoformat() if log.end_time else None,
        status=log.status,
        energy_consumed=float(log.energy_consumed) if log.energy_consumed is not None else None,
        cost=float(log.cost) if log.cost is not None else None,
    )


def _booking_to_response(booking: Booking, *, with_details: bool = False) -> BookingResponse:
    """Build BookingResponse; with_details adds station and charging log (relationships must be loaded)."""
    station = None
    charging_log = None
    if with_details:
        station = station_to_response(booking.charging_point.station)
        if booking.charging_log is not None:
            charging_log = log_to_response(booking.charging_log)
    return BookingResponse(
        booking_id=booking.id,
        user_id=booking.user_id,
        charging_point_id=booking.charging_point_id,
        date=booking.booking_date.isoformat(),
        start_time=format_hhmm(booking.start_time),
        end_time=format_hhmm(booking.end_time),
        status=booking.status,
        station=station,
        charging_log=charging_log,
    )


@router.get("", response_model=list[BookingResponse])
def list_upcoming_bookings(
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> list[BookingResponse]:
    """Current and upcoming bookings of the session user."""
    bookings = repo_list_upcoming_bookings(db, user_id, date.today())
    return [_booking_to_response(b, with_details=True) for b in bookings]


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    body: BookingCreate,
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> BookingResponse:
    """Book a charging point for [start_time, end_time) on date."""
    booking = repo_create_booking(
        db,
        user_id=user_id,
        charging_point_id=body.charging_point_id,
        booking_date=body.date,
        start_time=body.start_time,
        end_time=body.end_time,
    )
    if booking is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=BOOKING_FAILED_MESSAGE)
    return _booking_to_response(booking)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: int,
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> BookingResponse:
    """Booking details; only visible to its owner."""
    booking = repo_get_booking_details(db, booking_id)
    if booking is None or booking.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return _booking_to_response(booking, with_details=True)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: int,
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> BookingResponse:
    """Cancel a scheduled booking and release its charging point."""
    booking = repo_get_booking(db, booking_id)
    if booking is None or booking.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    if not repo_cancel_booking(db, booking_id, user_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Booking could not be cancelled",
        )
    return _booking_to_response(repo_get_booking_details(db, booking_id), with_details=True)
