"""Generic reads over resource tables.

Resource tables have no declared schema, so rows are read with
``SELECT *`` and every cell is coerced into a tagged value.
"""

from __future__ import annotations

import logging
from typing import Iterator

from sqlalchemy import Result
from sqlalchemy.exc import SQLAlchemyError

from spendscope.core.coercion import coerce_value
from spendscope.db import catalog
from spendscope.db.errors import QueryError
from spendscope.db.queries import TableRef, count_statement, scan_statement, sum_statement
from spendscope.db.repo import DbSession
from spendscope.models.values import Record

logger = logging.getLogger(__name__)


def _execute(session: DbSession, statement, table_name: str) -> Result:
    try:
        return session.execute(statement)
    except SQLAlchemyError as e:
        logger.error(f"Error querying table {table_name}: {e}")
        raise QueryError(f"Could not query table {table_name}: {e}") from e


def scan_table(session: DbSession, ref: TableRef, execution_id: int) -> Iterator[Record]:
    """Stream one execution's rows from a resource table.

    The query runs immediately, so a bad table fails here rather than on
    first iteration. The returned iterator is one-shot. It holds the
    cursor open until exhausted; callers that stop early should call
    ``close()`` on it to release the cursor.

    Args:
        session: Database session.
        ref: Table from the catalog.
        execution_id: Execution whose rows to read.

    Returns:
        Iterator of records, column name -> coerced value.

    Raises:
        QueryError: If the query fails, now or while fetching.
    """
    result = _execute(session, scan_statement(ref, execution_id), ref.name)
    return _iter_records(result, ref.name)


def _iter_records(result: Result, table_name: str) -> Iterator[Record]:
    try:
        for row in result.mappings():
            yield {name: coerce_value(raw) for name, raw in row.items()}
    except SQLAlchemyError as e:
        raise QueryError(f"Could not read rows from {table_name}: {e}") from e
    finally:
        result.close()


def get_table_data(session: DbSession, table_name: str, execution_id: int) -> list[Record]:
    """Read all of one execution's rows from a named table.

    Nothing is returned if reading fails part way.

    Raises:
        UnknownTableError: If the table is not in the catalog.
        QueryError: If the rows cannot be read.
    """
    ref = catalog.resolve_table(session, table_name)
    return list(scan_table(session, ref, execution_id))


def count_rows(session: DbSession, ref: TableRef, execution_id: int) -> int:
    """Count one execution's rows without reading them."""
    result = _execute(session, count_statement(ref, execution_id), ref.name)
    return int(result.scalar_one())


def sum_column(session: DbSession, ref: TableRef, column_name: str, execution_id: int) -> float:
    """Sum a numeric column over one execution's rows. 0 when there are none."""
    result = _execute(session, sum_statement(ref, column_name, execution_id), ref.name)
    total = result.scalar_one()
    if total is None:
        return 0.0
    return float(total)
