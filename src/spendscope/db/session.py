"""Database session management.

The database URL (and with it the dialect) comes from the
SPENDSCOPE_DATABASE_URL environment variable, falling back to a SQLite
file under data/. Engines are opened once per URL and reused for the
life of the process.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from spendscope.db.errors import ConnectivityError
from spendscope.db.schema import Base

logger = logging.getLogger(__name__)

DATABASE_URL_ENV = "SPENDSCOPE_DATABASE_URL"

# Default database path
DEFAULT_DB_PATH = Path("data/spendscope.db")

# Module-level engine cache, keyed by URL
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


def get_database_url(database_url: str | None = None) -> str:
    """Resolve the database URL.

    Args:
        database_url: Explicit URL. Takes precedence over the environment.

    Returns:
        SQLAlchemy database URL.
    """
    if database_url:
        return database_url
    return os.environ.get(DATABASE_URL_ENV, f"sqlite:///{DEFAULT_DB_PATH}")


def get_engine(database_url: str | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by URL. The first call for a URL opens a
    connection to verify the database is reachable.

    SQLite uses StaticPool and check_same_thread=False so the single
    connection can be shared with the API worker threads.

    Args:
        database_url: Database URL. Defaults to get_database_url().

    Returns:
        SQLAlchemy engine instance (cached).

    Raises:
        ConnectivityError: If the database cannot be reached.
    """
    url = get_database_url(database_url)

    if url in _engine_cache:
        return _engine_cache[url]

    parsed = make_url(url)
    echo = logging.getLogger("spendscope").isEnabledFor(logging.DEBUG)
    logger.info(f"Setting up storage: dialect={parsed.get_backend_name()}")

    if parsed.get_backend_name() == "sqlite":
        if parsed.database and parsed.database != ":memory:":
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url, echo=echo)

    try:
        with engine.connect():
            pass
    except SQLAlchemyError as e:
        engine.dispose()
        raise ConnectivityError(f"Failed to connect to database: {e}") from e

    _engine_cache[url] = engine
    return engine


def _get_session_factory(database_url: str | None = None) -> sessionmaker:
    """Get cached session factory for the database.

    Args:
        database_url: Database URL.

    Returns:
        Cached sessionmaker instance.
    """
    url = get_database_url(database_url)

    if url in _session_factory_cache:
        return _session_factory_cache[url]

    factory = sessionmaker(bind=get_engine(url))
    _session_factory_cache[url] = factory

    return factory


def get_session(database_url: str | None = None) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session. For automatic
    resource management, use get_db_session() context manager instead.

    Args:
        database_url: Database URL.

    Returns:
        SQLAlchemy Session instance.
    """
    factory = _get_session_factory(database_url)
    return factory()


@contextmanager
def get_db_session(database_url: str | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Args:
        database_url: Database URL.

    Yields:
        SQLAlchemy Session instance.
    """
    session = get_session(database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(database_url: str | None = None) -> None:
    """Create the ledger tables if they do not exist.

    Call this once during application startup.

    Args:
        database_url: Database URL.
    """
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
