"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "8001"))

TESTING = os.environ.get("TESTING") == "true"

# When TESTING=true, use test DB URL so tests never touch production.
if TESTING:
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./charging.db",
    )

# Signs the session cookie that carries the user id and flash messages.
SESSION_SECRET_KEY = os.environ.get("SESSION_SECRET_KEY", "change-me-in-production")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "CORS_ORIGINS", "http://localhost:8080,http://127.0.0.1:8080"
    ).split(",")
    if origin.strip()
]

# Demo stations/users are seeded on startup outside of tests unless disabled.
SEED_DEMO_DATA = os.environ.get("SEED_DEMO_DATA", "false" if TESTING else "true") == "true"

# Daily booking grid served to the booking form: opening hours and slot length.
SLOT_DAY_START = os.environ.get("SLOT_DAY_START", "09:00")
SLOT_DAY_END = os.environ.get("SLOT_DAY_END", "18:00")
SLOT_MINUTES = int(os.environ.get("SLOT_MINUTES", "60"))
