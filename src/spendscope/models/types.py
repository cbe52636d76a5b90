"""Pydantic models for the spendscope API."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

StatusName = Literal["fetching", "error", "finished"]


class ExecutionDetail(BaseModel):
    """Execution details for API response."""

    id: int
    name: str
    created_at: datetime


class SummaryDetail(BaseModel):
    """One resource table's figures within an execution."""

    resource_name: str
    resource_count: int
    total_spent: float
    status: StatusName
    description: str


class ResourceData(BaseModel):
    """Rows of one resource table for one execution."""

    table_name: str
    execution_id: int
    rows: list[dict[str, float | bool | str | None]]
