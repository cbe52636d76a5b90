"""Statement builders for dynamically named resource tables.

Resource table names are not known until runtime, so they cannot be
bound as parameters. Builders only accept a TableRef, which the catalog
hands out for names it has seen in the database. The table identifier
is quoted by the dialect and ``execution_id`` is always a bound
parameter.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Select, column, func, literal_column, select, table

# Columns every resource table is expected to carry
EXECUTION_ID_COLUMN = "execution_id"
PRICE_COLUMN = "price_per_month"


@dataclass(frozen=True)
class TableRef:
    """A resource table name obtained from the catalog.

    Construct through ``catalog.resolve_table``; never from request input.
    """

    name: str


def scan_statement(ref: TableRef, execution_id: int) -> Select:
    """SELECT * over one execution's rows."""
    t = table(ref.name, column(EXECUTION_ID_COLUMN))
    return select(literal_column("*")).select_from(t).where(
        t.c[EXECUTION_ID_COLUMN] == execution_id
    )


def count_statement(ref: TableRef, execution_id: int) -> Select:
    """SELECT COUNT(*) over one execution's rows."""
    t = table(ref.name, column(EXECUTION_ID_COLUMN))
    return select(func.count()).select_from(t).where(t.c[EXECUTION_ID_COLUMN] == execution_id)


def sum_statement(ref: TableRef, column_name: str, execution_id: int) -> Select:
    """SELECT SUM(column) over one execution's rows."""
    t = table(ref.name, column(EXECUTION_ID_COLUMN), column(column_name))
    return (
        select(func.sum(t.c[column_name]))
        .select_from(t)
        .where(t.c[EXECUTION_ID_COLUMN] == execution_id)
    )
