"""
WordMaster – Database initialisation & session management
==========================================================
Owns the SQLAlchemy engine and session factory used by ``core.word_ops``.
The engine is created lazily from the configured database URL, or
explicitly with :func:`init_engine` (tests pass an in-memory URL).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import load_settings
from db.models import Base

log = logging.getLogger(__name__)

engine: Optional[Engine] = None
SessionLocal: Optional[sessionmaker] = None


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key enforcement for every SQLite connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_engine(database_url: Optional[str] = None, *, echo: bool = False) -> Engine:
    """(Re)create the engine and session factory for *database_url*.

    Without a URL the one from :func:`core.config.load_settings` is used.
    An in-memory SQLite URL gets a single shared connection so every
    session sees the same database.
    """
    global engine, SessionLocal

    if database_url is None:
        settings = load_settings()
        database_url, echo = settings.database_url, settings.database_echo

    url = make_url(database_url)
    kwargs = {}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    if engine is not None:
        engine.dispose()
    engine = create_engine(url, echo=echo, **kwargs)
    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _set_sqlite_pragma)

    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    log.info("Database engine ready (%s)", url.render_as_string(hide_password=True))
    return engine


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def init_db() -> None:
    """Create all tables if they do not exist yet."""
    if engine is None:
        init_engine()
    Base.metadata.create_all(bind=engine)


def get_session() -> Session:
    """Return a new SQLAlchemy session."""
    if SessionLocal is None:
        init_engine()
    return SessionLocal()
