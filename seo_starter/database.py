"""SQLite persistence for the database-backed content store.

A single process-wide engine serves every :class:`DatabaseContentStore`.
It is created on first use from an explicit URL, the ``DATABASE_URL``
environment variable, or ``data/content.db``.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///data/content.db"
MEMORY_DATABASE_URL = "sqlite:///:memory:"

_SQLITE_PRAGMAS = (
    "journal_mode=WAL",
    "synchronous=NORMAL",
    "busy_timeout=5000",
)


class Base(DeclarativeBase):
    """Declarative base for content tables."""


_engine: Optional[Engine] = None
_sessions: Optional[sessionmaker] = None


def _apply_sqlite_pragmas(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    for pragma in _SQLITE_PRAGMAS:
        cursor.execute("PRAGMA " + pragma)
    cursor.close()


def _engine_options(database_url: str) -> dict[str, Any]:
    """Pool and connect arguments for a content database URL.

    SQLite connections are used from the accessor's worker threads.  An
    in-memory database is held on one static connection so every thread
    sees the same tables; a file database gets its parent directory created.
    """
    if not database_url.startswith("sqlite"):
        return {"pool_pre_ping": True}

    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if database_url == MEMORY_DATABASE_URL:
        options["poolclass"] = StaticPool
    elif database_url.startswith("sqlite:///"):
        db_file = Path(database_url[len("sqlite:///"):])
        db_file.parent.mkdir(parents=True, exist_ok=True)
    return options


def get_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """Return the content engine, creating it on first call.

    Arguments are only honoured by the call that creates the engine; use
    :func:`reset_engine` to switch databases.
    """
    global _engine
    if _engine is not None:
        return _engine

    url = database_url or os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
    _engine = create_engine(url, echo=echo, **_engine_options(url))
    if url.startswith("sqlite"):
        event.listen(_engine, "connect", _apply_sqlite_pragmas)
    logger.info("Content database engine created: %s", url)
    return _engine


@contextmanager
def get_session() -> Iterator[Session]:
    """Transactional session on the content engine.

    Commits when the block exits normally and rolls back when it raises.

    Usage::

        with get_session() as session:
            session.add(ContentEntry(collection="seo", entry_id="global", data={}))
    """
    global _sessions
    if _sessions is None:
        _sessions = sessionmaker(bind=get_engine(), expire_on_commit=False)
    with _sessions.begin() as session:
        yield session


def init_db(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """Create the content tables if they are missing and return the engine."""
    engine = get_engine(database_url=database_url, echo=echo)
    import seo_starter.models  # noqa: F401  (registers ContentEntry)
    Base.metadata.create_all(bind=engine)
    logger.info("Content tables ready: %s", ", ".join(sorted(Base.metadata.tables)))
    return engine


def reset_engine() -> None:
    """Dispose of the cached engine and session factory."""
    global _engine, _sessions
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _sessions = None
