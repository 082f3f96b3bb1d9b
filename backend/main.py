"""EV charging point booking: FastAPI backend."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI

# Booking transactions log rejections and failures (INFO level)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logging.getLogger("repositories").setLevel(logging.INFO)
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from db import SessionLocal
from api.booking_form import router as booking_form_router
from api.bookings import router as bookings_router
from api.charging import router as charging_router
from api.routes import router
from api.stations import router as stations_router
from repositories.station_repository import count_stations, create_charging_point, create_station
from repositories.user_repository import count_users, create_user
from schemas.health import HealthResponse
from utils.config import CORS_ORIGINS, SEED_DEMO_DATA, SESSION_SECRET_KEY

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="EV Charging Booking",
    description="Reserve charging points at EV charging stations",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Signed cookie session: session user id and flash messages.
app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET_KEY, same_site="lax")

# JSON API under /api; the booking form posts outside it and is answered with redirects.
app.include_router(router, prefix="/api")
app.include_router(stations_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(charging_router, prefix="/api")
app.include_router(booking_form_router)


@app.get("/api/health", response_model=HealthResponse)
def api_health() -> HealthResponse:
    """Explicit health route so /api/health is always available."""
    return HealthResponse()


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations and seed demo data."""
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    if SEED_DEMO_DATA:
        _seed_demo_data_if_empty()


def _seed_demo_data_if_empty() -> None:
    """Seed two stations with charging points and a demo user so the booking form has data."""
    db = SessionLocal()
    try:
        if count_stations(db) == 0:
            central = create_station(
                db,
                address_street="Via Roma",
                address_civic_num="12",
                address_city="Milano",
                address_municipality="Milano",
                address_zipcode="20121",
            )
            for _ in range(3):
                create_charging_point(db, central.id, slots_num=2)
            mall = create_station(
                db,
                address_street="Corso Francia",
                address_civic_num="210",
                address_city="Torino",
                address_municipality="Torino",
                address_zipcode="10146",
            )
            for _ in range(2):
                create_charging_point(db, mall.id, slots_num=2)
            LOG.info("Seeded demo stations")
        if count_users(db) == 0:
            create_user(db, "Demo Driver", "driver@example.com")
            LOG.info("Seeded demo user")
    finally:
        db.close()


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "ev-charging-booking", "docs": "/docs", "health": "/api/health"}
