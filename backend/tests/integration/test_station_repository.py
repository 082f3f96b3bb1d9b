"""Integration tests: station repository with test DB session."""
import pytest

from repositories.booking_repository import create_booking, end_charging_session, start_charging_session
from repositories.station_repository import (
    count_charging_points,
    count_holding_bookings,
    count_stations,
    create_charging_point,
    get_charging_point,
    get_station,
    list_available_charging_points,
    list_charging_points,
    list_stations,
    set_charging_point_state,
)
from tests_support import future_date, hhmm

pytestmark = pytest.mark.integration


def test_create_and_list_stations(db_session, station):
    """Created stations are listed and counted."""
    ids = [s.id for s in list_stations(db_session)]
    assert station.id in ids
    assert count_stations(db_session) >= 1
    assert get_station(db_session, station.id).address_city == "Testville"


def test_get_station_not_found(db_session):
    """get_station returns None for unknown id."""
    assert get_station(db_session, 999999) is None


def test_list_charging_points_for_station(db_session, station):
    """Points are listed per station in id order."""
    p1 = create_charging_point(db_session, station.id, slots_num=2)
    p2 = create_charging_point(db_session, station.id, slots_num=4)
    points = list_charging_points(db_session, station.id)
    assert [p.id for p in points] == [p1.id, p2.id]
    assert count_charging_points(db_session, station.id) == 2


def test_list_available_charging_points_skips_maintenance(db_session, station):
    """Only points in state 'available' are returned."""
    ok = create_charging_point(db_session, station.id)
    create_charging_point(db_session, station.id, state="maintenance")
    assert [p.id for p in list_available_charging_points(db_session, station.id)] == [ok.id]


def test_get_charging_point_loads_station(db_session, station, point):
    """get_charging_point returns the point with its station."""
    found = get_charging_point(db_session, point.id)
    assert found is not None
    assert found.station.id == station.id


def test_set_state_maintenance_and_back(db_session, point):
    """Maintenance is stored; leaving it restores 'available' when there are no bookings."""
    assert set_charging_point_state(db_session, point.id, "maintenance").state == "maintenance"
    assert set_charging_point_state(db_session, point.id, "available").state == "available"


def test_leaving_maintenance_with_bookings_is_reserved(db_session, point, user):
    """A point that still has live bookings comes back as 'reserved'."""
    day = future_date()
    assert create_booking(
        db_session,
        user_id=user.id,
        charging_point_id=point.id,
        booking_date=day,
        start_time=hhmm("09:00"),
        end_time=hhmm("10:00"),
    ) is not None
    set_charging_point_state(db_session, point.id, "maintenance")
    assert set_charging_point_state(db_session, point.id, "available").state == "reserved"


def test_set_state_unknown_point(db_session):
    """Unknown point returns None."""
    assert set_charging_point_state(db_session, 999999, "maintenance") is None


def test_set_state_invalid_value(db_session, point):
    """Unknown state values are refused."""
    with pytest.raises(ValueError):
        set_charging_point_state(db_session, point.id, "broken")


def test_completed_session_no_longer_holds_point(db_session, point, user):
    """A booking whose charging session completed is not counted; the point can leave maintenance as available."""
    booking = create_booking(
        db_session,
        user_id=user.id,
        charging_point_id=point.id,
        booking_date=future_date(),
        start_time=hhmm("09:00"),
        end_time=hhmm("10:00"),
    )
    log = start_charging_session(db_session, booking.id, user.id)
    assert count_holding_bookings(db_session, point.id) == 1
    end_charging_session(db_session, log.id, user.id, 8.0, 2.8)
    assert count_holding_bookings(db_session, point.id) == 0
    set_charging_point_state(db_session, point.id, "maintenance")
    assert set_charging_point_state(db_session, point.id, "available").state == "available"
    assert [p.id for p in list_available_charging_points(db_session, point.station_id)] == [point.id]
