"""Charging session API routes: start on a booking, end with caller-supplied energy and cost."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from api.bookings import log_to_response
from api.deps import require_user_id
from db import get_db
from repositories.booking_repository import (
    end_charging_session as repo_end_charging_session,
    get_booking as repo_get_booking,
    get_charging_log as repo_get_charging_log,
    start_charging_session as repo_start_charging_session,
)
from schemas.bookings import ChargingEndRequest, ChargingLogResponse

router = APIRouter(tags=["charging"])


@router.post(
    "/bookings/{booking_id}/charging/start",
    response_model=ChargingLogResponse,
    status_code=status.HTTP_201_CREATED,
)
def start_charging(
    booking_id: int,
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> ChargingLogResponse:
    """Start the charging session of a scheduled booking."""
    booking = repo_get_booking(db, booking_id)
    if booking is None or booking.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    log = repo_start_charging_session(db, booking_id, user_id)
    if log is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Charging session could not be started",
        )
    return log_to_response(log)


@router.post("/charging-logs/{logs_id}/end", response_model=ChargingLogResponse)
def end_charging(
    logs_id: int,
    body: ChargingEndRequest,
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> ChargingLogResponse:
    """Close a running charging session."""
    existing = repo_get_charging_log(db, logs_id)
    if existing is None or existing.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Charging log not found")
    log = repo_end_charging_session(db, logs_id, user_id, body.energy_consumed, body.cost)
    if log is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Charging session could not be ended",
        )
    return log_to_response(log)


@router.get("/charging-logs/{logs_id}", response_model=ChargingLogResponse)
def get_charging_log(
    logs_id: int,
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> ChargingLogResponse:
    """One charging session of the session user."""
    log = repo_get_charging_log(db, logs_id)
    if log is None or log.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Charging log not found")
    return log_to_response(log)
