"""Station repository: stations and their charging points."""
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from models.booking import HOLDING_STATUSES, Booking
from models.charging_log import LOG_COMPLETED, ChargingLog
from models.charging_point import (
    CHARGING_POINT_STATES,
    STATE_AVAILABLE,
    STATE_MAINTENANCE,
    STATE_RESERVED,
    ChargingPoint,
)
from models.station import Station


def list_stations(session: Session) -> list[Station]:
    """Return all stations ordered by city and street."""
    result = session.execute(
        select(Station).order_by(Station.address_city, Station.address_street, Station.id)
    )
    return list(result.scalars().all())


def get_station(session: Session, station_id: int) -> Optional[Station]:
    """Return a station by id or None."""
    return session.get(Station, station_id)


def create_station(
    session: Session,
    *,
    address_street: str,
    address_city: str,
    address_civic_num: str | None = None,
    address_municipality: str | None = None,
    address_zipcode: str | None = None,
) -> Station:
    """Create a station, commit, and return it."""
    station = Station(
        address_street=address_street,
        address_civic_num=address_civic_num,
        address_city=address_city,
        address_municipality=address_municipality,
        address_zipcode=address_zipcode,
    )
    session.add(station)
    session.commit()
    session.refresh(station)
    return station


def count_stations(session: Session) -> int:
    """Return the number of stations (for seeding)."""
    result = session.execute(select(func.count()).select_from(Station))
    return result.scalar() or 0


def create_charging_point(
    session: Session,
    station_id: int,
    *,
    slots_num: int = 1,
    state: str = STATE_AVAILABLE,
) -> ChargingPoint:
    """Create a charging point at a station, commit, and return it."""
    point = ChargingPoint(station_id=station_id, slots_num=slots_num, state=state)
    session.add(point)
    session.commit()
    session.refresh(point)
    return point


def list_charging_points(session: Session, station_id: int) -> list[ChargingPoint]:
    """Return all charging points of a station."""
    result = session.execute(
        select(ChargingPoint).where(ChargingPoint.station_id == station_id).order_by(ChargingPoint.id)
    )
    return list(result.scalars().all())


def list_available_charging_points(session: Session, station_id: int) -> list[ChargingPoint]:
    """Return charging points of a station currently in state 'available'."""
    result = session.execute(
        select(ChargingPoint)
        .where(ChargingPoint.station_id == station_id, ChargingPoint.state == STATE_AVAILABLE)
        .order_by(ChargingPoint.id)
    )
    return list(result.scalars().all())


def count_charging_points(session: Session, station_id: int) -> int:
    """Return the number of charging points at a station."""
    result = session.execute(
        select(func.count()).select_from(ChargingPoint).where(ChargingPoint.station_id == station_id)
    )
    return result.scalar() or 0


def get_charging_point(session: Session, charging_point_id: int) -> Optional[ChargingPoint]:
    """Return a charging point with its station loaded, or None."""
    return session.execute(
        select(ChargingPoint)
        .where(ChargingPoint.id == charging_point_id)
        .options(selectinload(ChargingPoint.station))
    ).scalar_one_or_none()


def count_holding_bookings(session: Session, charging_point_id: int) -> int:
    """Number of scheduled/active bookings on a charging point whose charging is not finished."""
    result = session.execute(
        select(func.count())
        .select_from(Booking)
        .outerjoin(ChargingLog, ChargingLog.booking_id == Booking.id)
        .where(
            Booking.charging_point_id == charging_point_id,
            Booking.status.in_(HOLDING_STATUSES),
            or_(ChargingLog.id.is_(None), ChargingLog.status != LOG_COMPLETED),
        )
    )
    return result.scalar() or 0


def state_from_bookings(session: Session, point: ChargingPoint) -> str:
    """State the point should have given its bookings; maintenance is left alone."""
    if point.state == STATE_MAINTENANCE:
        return STATE_MAINTENANCE
    return STATE_RESERVED if count_holding_bookings(session, point.id) > 0 else STATE_AVAILABLE


def set_charging_point_state(session: Session, charging_point_id: int, state: str) -> Optional[ChargingPoint]:
    """
    Staff operation: put a point into or out of maintenance.
    'maintenance' is stored as-is; any other value recomputes reserved/available from bookings.
    Returns the updated point or None if not found. Raises ValueError for unknown states.
    """
    if state not in CHARGING_POINT_STATES:
        raise ValueError(f"unknown charging point state '{state}'")
    point = get_charging_point(session, charging_point_id)
    if point is None:
        return None
    if state == STATE_MAINTENANCE:
        point.state = STATE_MAINTENANCE
    else:
        point.state = STATE_RESERVED if count_holding_bookings(session, point.id) > 0 else STATE_AVAILABLE
    session.commit()
    session.refresh(point)
    return point
