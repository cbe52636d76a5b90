"""Storage error taxonomy.

- ConnectivityError: engine could not connect at startup (fatal).
- QueryError: a scan, count, sum, or ledger lookup failed (strict).
- BestEffortError: a single table could not be dropped during cleanup.
  Collected and logged, never raised.
"""

from __future__ import annotations


class StorageError(Exception):
    """Base class for storage failures."""

    pass


class ConnectivityError(StorageError):
    """Raised when the database cannot be reached at startup."""

    pass


class QueryError(StorageError):
    """Raised when a read against the ledger or a resource table fails."""

    pass


class UnknownTableError(QueryError):
    """Raised when a table name is not present in the catalog."""

    def __init__(self, table_name: str):
        super().__init__(f"Unknown table: {table_name}")
        self.table_name = table_name


class BestEffortError(StorageError):
    """A non-critical cleanup failure for one table."""

    def __init__(self, table_name: str, cause: Exception):
        super().__init__(f"Could not drop table {table_name}: {cause}")
        self.table_name = table_name
        self.cause = cause
