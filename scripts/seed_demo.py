#!/usr/bin/env python3
"""Seed a demo inventory and print its summary.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database (ledger tables)
2. Creates two resource tables, one with a price column and one without
3. Records one execution with rows and status updates for both tables
4. Prints the summary for that execution
"""

from __future__ import annotations

import sys
from pathlib import Path

from sqlalchemy import Boolean, Column, Float, Integer, MetaData, String, Table, insert

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from spendscope.aggregation.summary import summarize_execution  # noqa: E402
from spendscope.db import repo  # noqa: E402
from spendscope.db.session import get_db_session, get_engine, init_db  # noqa: E402
from spendscope.models.domain import DeploymentStatus  # noqa: E402

# Constants
DEMO_DB_URL = f"sqlite:///{PROJECT_ROOT / 'demo.db'}"

resource_metadata = MetaData()

ec2_instances = Table(
    "ec2_instances",
    resource_metadata,
    Column("id", Integer, primary_key=True),
    Column("execution_id", Integer, nullable=False),
    Column("instance_id", String(32)),
    Column("region", String(32)),
    Column("price_per_month", Float),
)

lambda_functions = Table(
    "lambda_functions",
    resource_metadata,
    Column("id", Integer, primary_key=True),
    Column("execution_id", Integer, nullable=False),
    Column("name", String(64)),
    Column("idle", Boolean),
)


def main() -> int:
    init_db(DEMO_DB_URL)
    resource_metadata.create_all(get_engine(DEMO_DB_URL))

    with get_db_session(DEMO_DB_URL) as session:
        execution = repo.create_execution(session, "demo")

        for table in (ec2_instances, lambda_functions):
            repo.create_status(
                session, table.name, DeploymentStatus.FETCHING, "collecting", execution.id
            )

        session.execute(
            insert(ec2_instances),
            [
                {"execution_id": execution.id, "instance_id": "i-0a1b", "region": "us-east-1",
                 "price_per_month": 61.32},
                {"execution_id": execution.id, "instance_id": "i-0c2d", "region": "eu-west-1",
                 "price_per_month": 14.6},
            ],
        )
        session.execute(
            insert(lambda_functions),
            [{"execution_id": execution.id, "name": "nightly-report", "idle": True}],
        )

        for table in (ec2_instances, lambda_functions):
            repo.create_status(
                session, table.name, DeploymentStatus.FINISHED, "done", execution.id
            )

    with get_db_session(DEMO_DB_URL) as session:
        for entry in summarize_execution(session, execution.id):
            print(
                f"{entry.resource_name}: {entry.resource_count} resources, "
                f"${entry.total_spent:.2f}/month ({entry.status.name.lower()})"
            )

    return 0


if __name__ == "__main__":
    sys.exit(main())
