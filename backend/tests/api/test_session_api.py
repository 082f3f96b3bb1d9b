"""API tests: session user and flash messages."""
import pytest

pytestmark = pytest.mark.api


def test_open_session_unknown_user_404(client):
    """POST /api/session returns 404 for an unknown user."""
    r = client.post("/api/session", json={"user_id": 999999})
    assert r.status_code == 404


def test_open_and_read_session(client, user):
    """POST /api/session binds the user; GET /api/session returns it."""
    r = client.post("/api/session", json={"user_id": user.id})
    assert r.status_code == 200
    assert r.json()["email"] == user.email
    r2 = client.get("/api/session")
    assert r2.status_code == 200
    assert r2.json()["user_id"] == user.id


def test_close_session(logged_in_client):
    """DELETE /api/session logs out; protected routes then return 401."""
    r = logged_in_client.delete("/api/session")
    assert r.status_code == 204
    assert logged_in_client.get("/api/session").status_code == 401
    assert logged_in_client.get("/api/bookings").status_code == 401


def test_flash_empty_by_default(client):
    """GET /api/flash returns an empty list without pending messages."""
    r = client.get("/api/flash")
    assert r.status_code == 200
    assert r.json() == []
