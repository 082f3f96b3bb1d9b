"""Booking repository: slot availability, booking transactions and charging sessions.

Write paths lock the charging point row, re-check availability and update the
point state in the same transaction. Any failure is rolled back and reported
as None/False; the reason is only logged.
"""
import logging
from datetime import date, datetime, time, timezone
from typing import Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from models.booking import HOLDING_STATUSES, STATUS_ACTIVE, STATUS_CANCELLED, STATUS_SCHEDULED, Booking
from models.charging_log import LOG_COMPLETED, LOG_IN_PROGRESS, ChargingLog
from models.charging_point import STATE_MAINTENANCE, STATE_RESERVED, ChargingPoint
from models.station import Station  # noqa: F401 - ChargingPoint.station target
from models.user import User  # noqa: F401 - Booking.user target
from repositories.station_repository import state_from_bookings

LOG = logging.getLogger(__name__)


def _overlaps(start_time: time, end_time: time):
    """SQL predicate: a booking's [start, end) overlaps the requested [start_time, end_time)."""
    return or_(
        and_(Booking.start_time <= start_time, Booking.end_time > start_time),
        and_(Booking.start_time < end_time, Booking.end_time >= end_time),
        and_(Booking.start_time >= start_time, Booking.end_time <= end_time),
    )


def _lock_charging_point(session: Session, charging_point_id: int) -> Optional[ChargingPoint]:
    """SELECT ... FOR UPDATE on the point row; serializes writers booking the same point."""
    return session.execute(
        select(ChargingPoint)
        .where(ChargingPoint.id == charging_point_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()


def find_conflicting_bookings(
    session: Session,
    charging_point_id: int,
    booking_date: date,
    start_time: time,
    end_time: time,
    *,
    exclude_booking_id: int | None = None,
) -> list[Booking]:
    """Return scheduled/active bookings on the point and date whose interval overlaps the request."""
    query = select(Booking).where(
        Booking.charging_point_id == charging_point_id,
        Booking.booking_date == booking_date,
        Booking.status.in_(HOLDING_STATUSES),
        _overlaps(start_time, end_time),
    )
    if exclude_booking_id is not None:
        query = query.where(Booking.id != exclude_booking_id)
    return list(session.execute(query.order_by(Booking.start_time)).scalars().all())


def is_charging_point_available(
    session: Session,
    charging_point_id: int,
    booking_date: date,
    start_time: time,
    end_time: time,
    *,
    exclude_booking_id: int | None = None,
) -> bool:
    """True if the point exists, is not in maintenance, and no live booking overlaps [start_time, end_time)."""
    point = session.get(ChargingPoint, charging_point_id)
    if point is None or point.state == STATE_MAINTENANCE:
        return False
    conflicts = find_conflicting_bookings(
        session,
        charging_point_id,
        booking_date,
        start_time,
        end_time,
        exclude_booking_id=exclude_booking_id,
    )
    return not conflicts


def create_booking(
    session: Session,
    *,
    user_id: int,
    charging_point_id: int,
    booking_date: date,
    start_time: time,
    end_time: time,
) -> Optional[Booking]:
    """
    Reserve [start_time, end_time) on a charging point for a user.
    Returns the scheduled booking, or None if the slot is not available or the write failed.
    """
    if end_time <= start_time:
        LOG.warning("Booking rejected: end %s not after start %s", end_time, start_time)
        return None
    try:
        point = _lock_charging_point(session, charging_point_id)
        if point is None:
            LOG.warning("Booking rejected: charging point %s not found", charging_point_id)
            session.rollback()
            return None
        if not is_charging_point_available(session, charging_point_id, booking_date, start_time, end_time):
            LOG.warning(
                "Booking rejected: charging point %s unavailable on %s %s-%s (state=%s)",
                charging_point_id,
                booking_date,
                start_time,
                end_time,
                point.state,
            )
            session.rollback()
            return None
        booking = Booking(
            user_id=user_id,
            charging_point_id=charging_point_id,
            booking_date=booking_date,
            start_time=start_time,
            end_time=end_time,
            status=STATUS_SCHEDULED,
        )
        session.add(booking)
        point.state = STATE_RESERVED
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        LOG.exception("Booking failed for charging point %s on %s", charging_point_id, booking_date)
        return None
    session.refresh(booking)
    LOG.info(
        "Booking %s created: user=%s point=%s %s %s-%s",
        booking.id,
        user_id,
        charging_point_id,
        booking_date,
        start_time,
        end_time,
    )
    return booking


def cancel_booking(session: Session, booking_id: int, user_id: int) -> bool:
    """
    Cancel a scheduled booking owned by user_id and release its charging point.
    Returns True on success, False if not found, not owned, not cancellable, or the write failed.
    """
    try:
        booking = session.execute(
            select(Booking).where(Booking.id == booking_id, Booking.user_id == user_id)
        ).scalar_one_or_none()
        if booking is None:
            LOG.warning("Cancel rejected: booking %s not found for user %s", booking_id, user_id)
            return False
        if booking.status != STATUS_SCHEDULED:
            LOG.warning("Cancel rejected: booking %s is %s", booking_id, booking.status)
            return False
        point = _lock_charging_point(session, booking.charging_point_id)
        booking.status = STATUS_CANCELLED
        session.flush()
        if point is not None:
            point.state = state_from_bookings(session, point)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        LOG.exception("Cancel failed for booking %s", booking_id)
        return False
    LOG.info("Booking %s cancelled by user %s", booking_id, user_id)
    return True


def get_booking(session: Session, booking_id: int) -> Optional[Booking]:
    """Return a booking by id or None."""
    return session.get(Booking, booking_id)


def get_booking_details(session: Session, booking_id: int) -> Optional[Booking]:
    """Return a booking with its charging point, station, user and charging log loaded."""
    return session.execute(
        select(Booking)
        .where(Booking.id == booking_id)
        .options(
            selectinload(Booking.charging_point).selectinload(ChargingPoint.station),
            selectinload(Booking.user),
            selectinload(Booking.charging_log),
        )
    ).scalar_one_or_none()


def list_upcoming_bookings(session: Session, user_id: int, today: date) -> list[Booking]:
    """Return a user's scheduled/active bookings from today on, soonest first."""
    result = session.execute(
        select(Booking)
        .where(
            Booking.user_id == user_id,
            Booking.booking_date >= today,
            Booking.status.in_(HOLDING_STATUSES),
        )
        .order_by(Booking.booking_date, Booking.start_time)
        .options(selectinload(Booking.charging_point).selectinload(ChargingPoint.station))
    )
    return list(result.scalars().all())


def list_bookings_on_date(session: Session, charging_point_id: int, booking_date: date) -> list[Booking]:
    """Return the scheduled/active bookings of a point on one date (for the slot grid)."""
    result = session.execute(
        select(Booking)
        .where(
            Booking.charging_point_id == charging_point_id,
            Booking.booking_date == booking_date,
            Booking.status.in_(HOLDING_STATUSES),
        )
        .order_by(Booking.start_time)
    )
    return list(result.scalars().all())


def start_charging_session(
    session: Session,
    booking_id: int,
    user_id: int,
    *,
    now: datetime | None = None,
) -> Optional[ChargingLog]:
    """
    Open a charging log for a scheduled booking owned by user_id; the booking becomes active.
    Returns the log, or None if the booking is missing, not owned, not scheduled or already has a log.
    """
    try:
        booking = get_booking_details(session, booking_id)
        if booking is None or booking.user_id != user_id:
            LOG.warning("Charging start rejected: booking %s not found for user %s", booking_id, user_id)
            return None
        if booking.status != STATUS_SCHEDULED or booking.charging_log is not None:
            LOG.warning("Charging start rejected: booking %s is %s", booking_id, booking.status)
            return None
        log = ChargingLog(
            booking_id=booking.id,
            user_id=booking.user_id,
            charging_point_id=booking.charging_point_id,
            start_time=now or datetime.now(timezone.utc),
            status=LOG_IN_PROGRESS,
        )
        session.add(log)
        booking.status = STATUS_ACTIVE
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        LOG.exception("Charging start failed for booking %s", booking_id)
        return None
    session.refresh(log)
    LOG.info("Charging session %s started for booking %s", log.id, booking_id)
    return log


def get_charging_log(session: Session, log_id: int) -> Optional[ChargingLog]:
    """Return a charging log by id or None."""
    return session.get(ChargingLog, log_id)


def end_charging_session(
    session: Session,
    log_id: int,
    user_id: int,
    energy_consumed: float,
    cost: float,
    *,
    now: datetime | None = None,
) -> Optional[ChargingLog]:
    """
    Close an in-progress charging log owned by user_id with the energy (kWh) and cost supplied.
    Returns the log, or None if missing, not owned or already closed.
    """
    try:
        log = get_charging_log(session, log_id)
        if log is None or log.user_id != user_id:
            LOG.warning("Charging end rejected: log %s not found for user %s", log_id, user_id)
            return None
        if log.status != LOG_IN_PROGRESS:
            LOG.warning("Charging end rejected: log %s is %s", log_id, log.status)
            return None
        log.end_time = now or datetime.now(timezone.utc)
        log.energy_consumed = energy_consumed
        log.cost = cost
        log.status = LOG_COMPLETED
        point = _lock_charging_point(session, log.charging_point_id)
        session.flush()
        if point is not None:
            point.state = state_from_bookings(session, point)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        LOG.exception("Charging end failed for log %s", log_id)
        return None
    session.refresh(log)
    LOG.info("Charging session %s ended: %s kWh, cost %s", log_id, energy_consumed, cost)
    return log
