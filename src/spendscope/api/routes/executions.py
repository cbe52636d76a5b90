"""Executions API endpoint.

GET /api/executions - List collector runs
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from spendscope.api.app import get_db_session
from spendscope.db import repo
from spendscope.db.repo import DbSession
from spendscope.models.types import ExecutionDetail

router = APIRouter()


@router.get("/executions", response_model=list[ExecutionDetail])
def list_executions(session: DbSession = Depends(get_db_session)) -> list[ExecutionDetail]:
    """List all executions, oldest first."""
    return [
        ExecutionDetail(id=e.id, name=e.name, created_at=e.audit.created_at)
        for e in repo.get_executions(session)
    ]
