"""Database engine and session for SQLite (dev/tests) / PostgreSQL (prod)."""
from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from utils.config import DATABASE_URL, TESTING


def _assert_test_database(url: str) -> None:
    """Refuse to start a test run against anything but a throwaway database."""
    path = url.lower().split("?")[0]
    if "charging.db" in path or (":memory:" not in path and "test" not in path):
        raise RuntimeError(
            "Tests must not run against production. Set TESTING_DATABASE_URL to sqlite:///:memory: "
            "(or another test URL containing :memory: or 'test')."
        )


def _build_engine(url: str) -> Engine:
    """Create the engine; SQLite gets cross-thread access, enforced FKs and, in memory, one shared connection."""
    if not url.startswith("sqlite"):
        # Row locks taken by booking writes need a real server; keep a healthy pool.
        return create_engine(url, echo=False, pool_pre_ping=True)
    kw = {"connect_args": {"check_same_thread": False}, "echo": False}
    if ":memory:" in url:
        kw["poolclass"] = StaticPool
    engine = create_engine(url, **kw)

    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_conn, connection_record):
        dbapi_conn.execute("PRAGMA foreign_keys=ON")
        # pysqlite's implicit BEGIN breaks SAVEPOINT nesting; SQLAlchemy emits BEGIN itself below.
        dbapi_conn.isolation_level = None

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


if TESTING:
    _assert_test_database(DATABASE_URL)

_engine = _build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def get_engine() -> Engine:
    """The process-wide engine (tests create tables on it)."""
    return _engine


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: yield a DB session and close after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
