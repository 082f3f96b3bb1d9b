"""Booking page controller: form post, validation, flash message, redirect."""
import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from api.deps import get_session_user_id
from db import get_db
from repositories.booking_repository import create_booking as repo_create_booking
from repositories.station_repository import get_charging_point
from schemas.bookings import BOOKING_FAILED_MESSAGE
from utils.booking_validators import validate_booking_form
from utils.flash import flash

LOG = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

BOOKINGS_PAGE = "/bookings"
DASHBOARD_PAGE = "/dashboard"
LOGIN_PAGE = "/login"
BOOKING_CREATED_MESSAGE = "Booking created successfully! Your charging slot has been reserved."


def _redirect(url: str) -> RedirectResponse:
    # 303 so the browser follows with GET.
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/bookings/process")
def process_booking(
    request: Request,
    station_id: str | None = Form(default=None),
    charging_point_id: str | None = Form(default=None),
    date: str | None = Form(default=None),
    start_time: str | None = Form(default=None),
    end_time: str | None = Form(default=None),
    db: Session = Depends(get_db),
) -> RedirectResponse:
    """Handle the booking form; every outcome is a flash message plus a redirect."""
    user_id = get_session_user_id(request)
    if user_id is None:
        flash(request, "error", "Please log in to book a charging point.")
        return _redirect(LOGIN_PAGE)

    ok, booking, err = validate_booking_form(
        {
            "station_id": station_id,
            "charging_point_id": charging_point_id,
            "date": date,
            "start_time": start_time,
            "end_time": end_time,
        }
    )
    if not ok:
        flash(request, "error", err)
        return _redirect(BOOKINGS_PAGE)

    retry_url = f"{BOOKINGS_PAGE}?{urlencode({'station_id': booking['station_id']})}"
    point = get_charging_point(db, booking["charging_point_id"])
    if point is None or point.station_id != booking["station_id"]:
        LOG.warning(
            "Booking form rejected: point %s is not at station %s",
            booking["charging_point_id"],
            booking["station_id"],
        )
        flash(request, "error", BOOKING_FAILED_MESSAGE)
        return _redirect(retry_url)

    created = repo_create_booking(
        db,
        user_id=user_id,
        charging_point_id=booking["charging_point_id"],
        booking_date=booking["booking_date"],
        start_time=booking["start_time"],
        end_time=booking["end_time"],
    )
    if created is None:
        flash(request, "error", BOOKING_FAILED_MESSAGE)
        return _redirect(retry_url)
    flash(request, "success", BOOKING_CREATED_MESSAGE)
    return _redirect(DASHBOARD_PAGE)
