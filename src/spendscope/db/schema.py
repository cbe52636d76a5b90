"""Database schema for the spendscope ledgers.

Only the two ledger tables are declared here. Resource tables are created
by collectors with whatever columns they need; every one of them carries
an ``execution_id`` column and may carry ``price_per_month``.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Execution(Base):
    """One collector run."""

    __tablename__ = "executions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )


class ResourceStatus(Base):
    """Processing status observation for one resource table (append-only).

    Invariant: id is strictly increasing, so the highest id for a
    (table_name, execution_id) pair is the current status.
    Status is stored as the DeploymentStatus ordinal.
    """

    __tablename__ = "resource_status"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    table_name: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    execution_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("executions.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
