"""SQLAlchemy declarative base for station, charging point, booking and user tables."""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all DB models; Alembic autogenerate reads its metadata."""
    pass
