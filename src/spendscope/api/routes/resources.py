"""Resources API endpoint.

GET /api/resources/{table_name}?execution_id= - Rows of one resource table
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from spendscope.api.app import get_db_session
from spendscope.db import rows
from spendscope.db.errors import UnknownTableError
from spendscope.db.repo import DbSession
from spendscope.models.types import ResourceData
from spendscope.models.values import record_to_python

router = APIRouter()


@router.get("/resources/{table_name}", response_model=ResourceData)
def get_resource_rows(
    table_name: str,
    execution_id: int = Query(...),
    session: DbSession = Depends(get_db_session),
) -> ResourceData:
    """Get one execution's rows from a resource table.

    The table name is checked against the catalog before it is used
    in a query.

    Raises:
        HTTPException: 404 if the table does not exist.
    """
    try:
        records = rows.get_table_data(session, table_name, execution_id)
    except UnknownTableError:
        raise HTTPException(status_code=404, detail="Resource table not found")

    return ResourceData(
        table_name=table_name,
        execution_id=execution_id,
        rows=[record_to_python(r) for r in records],
    )
