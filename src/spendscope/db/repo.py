"""Repository pattern for the execution and status ledgers.

Encapsulates all SQLAlchemy queries against the ledger tables.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from spendscope.db.errors import QueryError
from spendscope.db.schema import Execution, ResourceStatus
from spendscope.models.domain import (
    AuditFields,
    DeploymentStatus,
    ExecutionEntity,
    StatusRecord,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]

logger = logging.getLogger(__name__)


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _execution_to_entity(execution: Execution) -> ExecutionEntity:
    """Convert SQLAlchemy Execution to domain entity."""
    return ExecutionEntity(
        audit=AuditFields(id=execution.id, created_at=execution.created_at),
        name=execution.name,
    )


def _status_to_record(status: ResourceStatus) -> StatusRecord:
    """Convert SQLAlchemy ResourceStatus to domain record."""
    return StatusRecord(
        audit=AuditFields(id=status.id, created_at=status.created_at),
        table_name=status.table_name,
        status=DeploymentStatus(status.status),
        description=status.description,
        execution_id=status.execution_id,
    )


# ============================================================================
# Execution Repository
# ============================================================================


def create_execution(session: DbSession, name: str) -> ExecutionEntity:
    """Create a new execution and assign its id."""
    execution = Execution(name=name)
    session.add(execution)
    try:
        session.flush()
    except SQLAlchemyError as e:
        logger.error(f"Error creating execution {name}: {e}")
        raise QueryError(f"Could not create execution {name}: {e}") from e
    return _execution_to_entity(execution)


def get_executions(session: DbSession) -> list[ExecutionEntity]:
    """Get all executions, oldest first."""
    try:
        executions = session.query(Execution).order_by(Execution.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching executions: {e}")
        raise QueryError(f"Could not fetch executions: {e}") from e
    return [_execution_to_entity(e) for e in executions]


# ============================================================================
# Status Ledger Repository
# ============================================================================


def create_status(
    session: DbSession,
    table_name: str,
    status: DeploymentStatus,
    description: str,
    execution_id: int,
) -> StatusRecord:
    """Append a status observation for a resource table."""
    row = ResourceStatus(
        table_name=table_name,
        status=int(status),
        description=description,
        execution_id=execution_id,
    )
    session.add(row)
    try:
        session.flush()
    except SQLAlchemyError as e:
        logger.error(f"Error recording status for {table_name}: {e}")
        raise QueryError(f"Could not record status for {table_name}: {e}") from e
    return _status_to_record(row)


def get_latest_statuses(session: DbSession) -> list[StatusRecord]:
    """Get the current status of every (table_name, execution_id) pair.

    The current status is the record with the highest id for the pair.
    Computed across all executions; callers filter by execution afterwards.

    Raises:
        QueryError: If the ledger cannot be read.
    """
    latest_ids = select(func.max(ResourceStatus.id)).group_by(
        ResourceStatus.table_name, ResourceStatus.execution_id
    )
    try:
        rows = (
            session.query(ResourceStatus)
            .filter(ResourceStatus.id.in_(latest_ids))
            .order_by(ResourceStatus.id)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching latest resource statuses: {e}")
        raise QueryError(f"Could not fetch latest resource statuses: {e}") from e
    return [_status_to_record(r) for r in rows]

