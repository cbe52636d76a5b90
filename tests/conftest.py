"""Shared pytest fixtures for spendscope tests."""

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from spendscope.db.schema import Base, Execution


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine with the ledger tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def inventory(session):
    """Two resource tables and two executions.

    ec2 has a price_per_month column, lambda does not.
    Execution 7: 3 ec2 rows (40.0 + 50.25 + 30.25 = 120.5), 2 lambda rows.
    Execution 8: 1 ec2 row (9.5), no lambda rows.
    """
    session.add_all([Execution(id=7, name="run-7"), Execution(id=8, name="run-8")])
    session.flush()

    session.execute(
        text(
            "CREATE TABLE ec2 ("
            "id INTEGER PRIMARY KEY, execution_id INTEGER NOT NULL, "
            "instance_id TEXT, region TEXT, spot TEXT, launched_at TEXT, price_per_month REAL)"
        )
    )
    session.execute(
        text(
            "CREATE TABLE lambda ("
            "id INTEGER PRIMARY KEY, execution_id INTEGER NOT NULL, name TEXT, invocations INTEGER)"
        )
    )
    session.execute(
        text(
            "INSERT INTO ec2 (execution_id, instance_id, region, spot, launched_at, price_per_month) "
            "VALUES (:execution_id, :instance_id, :region, :spot, :launched_at, :price)"
        ),
        [
            {"execution_id": 7, "instance_id": "i-1", "region": "us-east-1", "spot": "true",
             "launched_at": "2024-01-02", "price": 40.0},
            {"execution_id": 7, "instance_id": "i-2", "region": "us-east-1", "spot": "false",
             "launched_at": None, "price": 50.25},
            {"execution_id": 7, "instance_id": "i-3", "region": "eu-west-1", "spot": "",
             "launched_at": None, "price": 30.25},
            {"execution_id": 8, "instance_id": "i-4", "region": "eu-west-1", "spot": "false",
             "launched_at": None, "price": 9.5},
        ],
    )
    session.execute(
        text("INSERT INTO lambda (execution_id, name, invocations) VALUES (:eid, :name, :inv)"),
        [
            {"eid": 7, "name": "resize-images", "inv": 0},
            {"eid": 7, "name": "nightly-report", "inv": 12},
        ],
    )
    session.flush()
    return session
