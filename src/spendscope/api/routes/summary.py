"""Summary API endpoints.

GET /api/summary - Summaries for every execution
GET /api/summary/{execution_id} - Summaries for one execution
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from spendscope.aggregation.summary import summarize, summarize_execution
from spendscope.api.app import get_db_session
from spendscope.db.repo import DbSession
from spendscope.models.domain import Summary
from spendscope.models.types import SummaryDetail

router = APIRouter()


def _to_detail(summary: Summary) -> SummaryDetail:
    return SummaryDetail(
        resource_name=summary.resource_name,
        resource_count=summary.resource_count,
        total_spent=summary.total_spent,
        status=summary.status.name.lower(),
        description=summary.description,
    )


@router.get("/summary", response_model=dict[int, list[SummaryDetail]])
def get_all_summaries(
    session: DbSession = Depends(get_db_session),
) -> dict[int, list[SummaryDetail]]:
    """Get inventory summaries keyed by execution id.

    Raises:
        QueryError: Any failed read; reported as 500 by the app handler.
    """
    return {
        execution_id: [_to_detail(s) for s in summaries]
        for execution_id, summaries in summarize(session).items()
    }


@router.get("/summary/{execution_id}", response_model=list[SummaryDetail])
def get_execution_summary(
    execution_id: int,
    session: DbSession = Depends(get_db_session),
) -> list[SummaryDetail]:
    """Get inventory summaries for one execution.

    An execution without status records yields an empty list.
    """
    return [_to_detail(s) for s in summarize_execution(session, execution_id)]
