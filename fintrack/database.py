"""
fintrack/database.py

SQLAlchemy plumbing for FinTrack: the declarative Base, a UTC datetime column
type, the Database client that owns the engine + session factory, and the
get_db() dependency used by every router.

The Database is constructed by the application at startup and stored on
app.state; nothing connects at import time.

Key Features:
- Handles SQLite (default) or any other SQLAlchemy URL
- Provides get_db() for FastAPI dependency injection
- create_tables() is idempotent; it never drops or rewrites existing data
"""

import logging
import datetime

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.types import TypeDecorator, String

logger = logging.getLogger(__name__)

Base = declarative_base()

# ------------------------------------------------------------------
# Custom UTC DateTime
# ------------------------------------------------------------------
class UTCDateTime(TypeDecorator):
    """
    Stores Python datetime objects as fixed-width ISO8601 strings with 'Z',
    e.g. '2024-01-01T00:00:00.000000Z', and reads them back as offset-aware
    UTC datetimes.

    Fixed width keeps string comparison in the store chronological, so range
    filters work the same on every backend.
    """
    impl = String(27)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """Convert Python datetime -> string before saving to DB."""
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        else:
            value = value.astimezone(datetime.timezone.utc)
        return value.isoformat(timespec="microseconds").replace("+00:00", "Z")

    def process_result_value(self, value, dialect):
        """Convert string -> Python datetime (UTC) after fetching from DB."""
        if value is None:
            return None
        value = value.replace("Z", "+00:00")
        return datetime.datetime.fromisoformat(value)

# ------------------------------------------------------------------
# Store client
# ------------------------------------------------------------------
class Database:
    """
    Owns the engine (and its connection pool) for one running application.
    """

    def __init__(self, url: str):
        self.url = url
        connect_args = {}
        if make_url(url).get_backend_name() == "sqlite":
            connect_args["check_same_thread"] = False  # SQLite + threadpool handlers

        self.engine = create_engine(url, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.debug(f"SQLAlchemy engine created for {self.engine.url!r}")

    def create_tables(self) -> None:
        # Import models so they register with Base.metadata
        from fintrack.models import user, transaction  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.debug("Executed Base.metadata.create_all")

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.debug("Disposed SQLAlchemy engine")

# ------------------------------------------------------------------
# FastAPI Dependency Injection
# ------------------------------------------------------------------
def get_db(request: Request):
    """
    Provides a DB session for FastAPI routes. Yields a session from the
    application's Database and closes it after use to prevent leaks.
    """
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
