"""Inventory summary aggregation.

Combines the latest status of each resource table with row counts and
monthly spend read from that table. Tables are processed one after the
other on the caller's session. Any failed read aborts the whole summary.
"""

from __future__ import annotations

from spendscope.db import catalog, repo, rows
from spendscope.db.queries import PRICE_COLUMN
from spendscope.db.repo import DbSession
from spendscope.models.domain import StatusRecord, Summary


def summarize(session: DbSession) -> dict[int, list[Summary]]:
    """Compute inventory summaries for every execution.

    Args:
        session: Database session.

    Returns:
        Mapping of execution id to one Summary per resource table, in
        ledger order.

    Raises:
        QueryError: If the ledger, the catalog, or any count or sum fails.
            No partial mapping is returned.
    """
    latest = repo.get_latest_statuses(session)
    if not latest:
        return {}

    known_tables = catalog.get_all_tables(session)

    summary: dict[int, list[Summary]] = {}
    for record in latest:
        entry = _summarize_table(session, record, known_tables)
        summary.setdefault(record.execution_id, []).append(entry)

    return summary


def summarize_execution(session: DbSession, execution_id: int) -> list[Summary]:
    """Compute inventory summaries for one execution.

    The ledger is still scanned in full; other executions are dropped
    from the result afterwards.
    """
    return summarize(session).get(execution_id, [])


def _summarize_table(
    session: DbSession,
    record: StatusRecord,
    known_tables: list[str],
) -> Summary:
    """Build the Summary for one latest status record."""
    ref = catalog.resolve_table(session, record.table_name, known_tables)

    count = rows.count_rows(session, ref, record.execution_id)

    # Tables without a price column have no spend
    total_spent = 0.0
    if catalog.has_column(session, ref, PRICE_COLUMN):
        total_spent = rows.sum_column(session, ref, PRICE_COLUMN, record.execution_id)

    return Summary(
        resource_name=record.table_name,
        resource_count=count,
        total_spent=total_spent,
        status=record.status,
        description=record.description,
    )
