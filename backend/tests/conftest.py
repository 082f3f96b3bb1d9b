# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from db import get_db, get_engine
from main import app
from models import Base
from models.booking import Booking  # noqa: F401 - register with Base
from models.charging_log import ChargingLog  # noqa: F401
from models.charging_point import ChargingPoint  # noqa: F401
from models.station import Station  # noqa: F401
from models.user import User  # noqa: F401
from repositories.station_repository import create_charging_point, create_station
from repositories.user_repository import create_user


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run; create tables once."""
    eng = get_engine()
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture
def db_session(engine):
    """
    Function-scoped session; each test runs in a transaction that is rolled back.
    Commits and rollbacks issued by repositories only touch a SAVEPOINT inside it.
    """
    connection = engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        if trans.is_active:
            trans.rollback()
        connection.close()


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def client(db_session):
    """API test client; overrides get_db to use the test db_session, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def user(db_session):
    """A user with a unique email."""
    return create_user(db_session, "Test Driver", f"driver-{uuid.uuid4().hex[:8]}@example.com")


@pytest.fixture
def other_user(db_session):
    """A second user, for ownership checks."""
    return create_user(db_session, "Other Driver", f"other-{uuid.uuid4().hex[:8]}@example.com")


@pytest.fixture
def station(db_session):
    """A station with no charging points."""
    return create_station(
        db_session,
        address_street="Via Test",
        address_civic_num="1",
        address_city="Testville",
        address_municipality="Testville",
        address_zipcode="00100",
    )


@pytest.fixture
def point(db_session, station):
    """An available charging point at the station fixture."""
    return create_charging_point(db_session, station.id, slots_num=2)


@pytest.fixture
def logged_in_client(client, user):
    """Client whose session is bound to the user fixture."""
    r = client.post("/api/session", json={"user_id": user.id})
    assert r.status_code == 200
    return client
