"""API tests: booking form post with flash messages and redirects."""
import pytest

from repositories.booking_repository import list_bookings_on_date
from repositories.station_repository import create_charging_point, create_station
from tests_support import future_date

pytestmark = pytest.mark.api


def _form(station, point, **overrides):
    data = {
        "station_id": str(station.id),
        "charging_point_id": str(point.id),
        "date": future_date().isoformat(),
        "start_time": "09:00",
        "end_time": "10:00",
    }
    data.update(overrides)
    return data


def _post(client, data):
    return client.post("/bookings/process", data=data, follow_redirects=False)


def _flashes(client):
    return client.get("/api/flash").json()


def test_form_requires_login(client, station, point):
    """Without a session user the form redirects to the login page."""
    r = _post(client, _form(station, point))
    assert r.status_code == 303
    assert r.headers["location"] == "/login"
    assert _flashes(client)[0]["category"] == "error"


def test_form_success_redirects_to_dashboard(logged_in_client, db_session, station, point):
    """A valid form creates the booking, flashes success and redirects to the dashboard."""
    r = _post(logged_in_client, _form(station, point))
    assert r.status_code == 303
    assert r.headers["location"] == "/dashboard"
    flashes = _flashes(logged_in_client)
    assert flashes == [
        {"category": "success", "message": "Booking created successfully! Your charging slot has been reserved."}
    ]
    assert len(list_bookings_on_date(db_session, point.id, future_date())) == 1
    # Flash messages are one-shot.
    assert _flashes(logged_in_client) == []


def test_form_missing_fields(logged_in_client, station, point):
    """Missing fields flash an error and go back to the booking page."""
    r = _post(logged_in_client, {"station_id": str(station.id)})
    assert r.status_code == 303
    assert r.headers["location"] == "/bookings"
    assert _flashes(logged_in_client)[0]["message"] == "Please fill in all required fields."


def test_form_bad_format(logged_in_client, station, point):
    """Malformed time flashes the format error."""
    r = _post(logged_in_client, _form(station, point, start_time="9am"))
    assert r.headers["location"] == "/bookings"
    assert _flashes(logged_in_client)[0]["message"] == "Invalid date or time format."


def test_form_conflict_redirects_back_to_station(logged_in_client, station, point):
    """A taken slot flashes the generic failure and returns to the station's booking page."""
    assert _post(logged_in_client, _form(station, point)).headers["location"] == "/dashboard"
    _flashes(logged_in_client)
    r = _post(logged_in_client, _form(station, point, start_time="09:30", end_time="10:30"))
    assert r.status_code == 303
    assert r.headers["location"] == f"/bookings?station_id={station.id}"
    flashes = _flashes(logged_in_client)
    assert flashes[0]["category"] == "error"
    assert "may no longer be available" in flashes[0]["message"]


def test_form_point_from_other_station(logged_in_client, db_session, station, point):
    """A charging point that does not belong to the chosen station is refused."""
    elsewhere = create_station(db_session, address_street="Other St", address_city="Elsewhere")
    foreign = create_charging_point(db_session, elsewhere.id)
    r = _post(logged_in_client, _form(station, foreign))
    assert r.headers["location"] == f"/bookings?station_id={station.id}"
    assert list_bookings_on_date(db_session, foreign.id, future_date()) == []


def test_form_maintenance_point(logged_in_client, db_session, station):
    """A point under maintenance is refused through the form as well."""
    broken = create_charging_point(db_session, station.id, state="maintenance")
    r = _post(logged_in_client, _form(station, broken))
    assert r.headers["location"] == f"/bookings?station_id={station.id}"
