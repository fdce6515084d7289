"""
Database engine, session management, and base model.

All state lives in an in-memory SQLite database owned by this
module. Every model inherits from Base. Every request gets a
session from get_db().
"""

from datetime import datetime, timezone

import anyio
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from bank_api.config import get_settings

settings = get_settings()

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def engine_options(url: str) -> dict:
    """
    Connection options for a database URL.

    An in-memory SQLite database exists only as long as its
    connection does, so every session must share one connection
    (StaticPool). The connection is used from FastAPI's worker
    threads, hence check_same_thread=False.
    """
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in IN_MEMORY_URLS:
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True}


# --- Engine ---
engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# --- Session Factory ---
# autocommit=False means we explicitly control when changes
# are saved. autoflush=False means nothing is sent to the
# database until we flush or commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)

# One session at a time on the shared connection.
_session_lock = anyio.Lock()


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def init_db() -> None:
    """Create all tables. Idempotent."""
    Base.metadata.create_all(bind=engine)


# --- Dependency for FastAPI ---
async def get_db():
    """
    Provide a database session for a single request.

    Requests are served one at a time against the store: the
    lock is held from session creation until the session is
    closed, so no request can see another's uncommitted writes
    or roll them back. Requests waiting for the lock wait on the
    event loop, so they never tie up the worker threads that sync
    endpoints run on.
    """
    async with _session_lock:
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()
