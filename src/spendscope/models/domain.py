"""Domain models for spendscope.

Pure Python dataclasses representing ledger entities and derived
summaries. These are independent of SQLAlchemy; the repository converts
rows into them before they leave the db package.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class DeploymentStatus(IntEnum):
    """Processing state of a resource table. Persisted as the ordinal."""

    FETCHING = 0
    ERROR = 1
    FINISHED = 2


@dataclass(frozen=True)
class AuditFields:
    """Identity and creation time assigned by the ledger."""

    id: int
    created_at: datetime


# ============================================================================
# Execution Ledger
# ============================================================================


@dataclass
class ExecutionEntity:
    """Domain model for a collector run."""

    audit: AuditFields
    name: str

    @property
    def id(self) -> int:
        return self.audit.id


# ============================================================================
# Status Ledger
# ============================================================================


@dataclass
class StatusRecord:
    """Domain model for one resource status observation."""

    audit: AuditFields
    table_name: str
    status: DeploymentStatus
    description: str
    execution_id: int

    @property
    def id(self) -> int:
        return self.audit.id


# ============================================================================
# Summary
# ============================================================================


@dataclass
class Summary:
    """Per-table inventory figures for one execution (derived, not stored)."""

    resource_name: str
    resource_count: int
    total_spent: float
    status: DeploymentStatus
    description: str
