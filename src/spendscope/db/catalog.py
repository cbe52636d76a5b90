"""Table catalog: discovery, validation, and cleanup of tables.

Discovery goes through the dialect's inspector on the session's own
connection, so tables created earlier in the same transaction are seen.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import MetaData, Table, inspect
from sqlalchemy.exc import SQLAlchemyError

from spendscope.db.errors import BestEffortError, QueryError, UnknownTableError
from spendscope.db.queries import TableRef
from spendscope.db.repo import DbSession

logger = logging.getLogger(__name__)


def get_all_tables(session: DbSession) -> list[str]:
    """Return the names of all tables in the database.

    Raises:
        QueryError: If the database cannot be introspected.
    """
    try:
        return list(inspect(session.connection()).get_table_names())
    except SQLAlchemyError as e:
        logger.error(f"Error listing tables: {e}")
        raise QueryError(f"Could not list tables: {e}") from e


def resolve_table(
    session: DbSession,
    table_name: str,
    known_tables: Iterable[str] | None = None,
) -> TableRef:
    """Validate a table name against the catalog.

    Args:
        session: Database session.
        table_name: Candidate table name.
        known_tables: Previously fetched catalog, to avoid re-listing.

    Returns:
        TableRef usable by the statement builders.

    Raises:
        UnknownTableError: If no such table exists.
    """
    if known_tables is None:
        known_tables = get_all_tables(session)
    if table_name not in set(known_tables):
        raise UnknownTableError(table_name)
    return TableRef(table_name)


def has_column(session: DbSession, ref: TableRef, column_name: str) -> bool:
    """Check whether a table exposes the given column.

    Raises:
        QueryError: If the table's columns cannot be read.
    """
    try:
        columns = inspect(session.connection()).get_columns(ref.name)
    except SQLAlchemyError as e:
        raise QueryError(f"Could not read columns of {ref.name}: {e}") from e
    return any(c["name"] == column_name for c in columns)


def drop_table(session: DbSession, table_name: str) -> None:
    """Drop a table if it exists."""
    Table(table_name, MetaData()).drop(session.connection(), checkfirst=True)


def clear_tables(session: DbSession) -> list[BestEffortError]:
    """Drop every table in the database, best effort.

    Tables are dropped dependents first, each inside its own savepoint.
    A table that fails to drop is rolled back to its savepoint, logged and
    skipped; the remaining tables are still dropped. Running
    this on an empty database is a no-op.

    Returns:
        One BestEffortError per table that could not be dropped.

    Raises:
        QueryError: If the table list itself cannot be read.
    """
    tables = get_all_tables(session)
    if not tables:
        return []

    failures: list[BestEffortError] = []
    for table_name in _drop_order(session, tables):
        try:
            with session.begin_nested():
                drop_table(session, table_name)
        except SQLAlchemyError as e:
            failure = BestEffortError(table_name, e)
            logger.warning(str(failure))
            failures.append(failure)

    logger.info(f"Cleared {len(tables) - len(failures)} of {len(tables)} tables")
    return failures


def _drop_order(session: DbSession, tables: list[str]) -> list[str]:
    """Order tables so that foreign-key dependents come before their parents."""
    metadata = MetaData()
    try:
        metadata.reflect(bind=session.connection(), only=tables)
    except SQLAlchemyError as e:
        logger.warning(f"Could not reflect foreign keys, dropping in listed order: {e}")
        return tables
    return [t.name for t in reversed(metadata.sorted_tables)]
