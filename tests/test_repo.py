"""Tests for the execution and status ledgers.

Invariant: the current status of a (table, execution) pair is the
record with the highest id.
"""

import pytest
from sqlalchemy import text

from spendscope.db import repo
from spendscope.db.errors import QueryError
from spendscope.db.schema import Execution, ResourceStatus
from spendscope.models.domain import DeploymentStatus


class TestExecutions:
    """Execution ledger."""

    def test_create_assigns_increasing_ids(self, session):
        first = repo.create_execution(session, "morning")
        second = repo.create_execution(session, "evening")
        assert second.id > first.id
        assert first.audit.created_at is not None

    def test_get_executions_oldest_first(self, session):
        repo.create_execution(session, "a")
        repo.create_execution(session, "b")
        assert [e.name for e in repo.get_executions(session)] == ["a", "b"]

    def test_get_executions_empty(self, session):
        assert repo.get_executions(session) == []

    def test_create_failure_raises_query_error(self, session):
        session.execute(text("DROP TABLE executions"))
        with pytest.raises(QueryError):
            repo.create_execution(session, "lost")


class TestCreateStatus:
    """Status ledger writes."""

    def test_status_stored_as_ordinal(self, session):
        execution = repo.create_execution(session, "run")
        repo.create_status(session, "ec2", DeploymentStatus.FINISHED, "ok", execution.id)

        stored = session.execute(text("SELECT status FROM resource_status")).scalar_one()
        assert stored == 2

    def test_wire_values(self):
        assert DeploymentStatus.FETCHING == 0
        assert DeploymentStatus.ERROR == 1
        assert DeploymentStatus.FINISHED == 2

    def test_create_failure_raises_query_error(self, session):
        session.execute(text("DROP TABLE resource_status"))
        with pytest.raises(QueryError):
            repo.create_status(session, "ec2", DeploymentStatus.FETCHING, "", 1)

    def test_returns_record(self, session):
        execution = repo.create_execution(session, "run")
        record = repo.create_status(
            session, "ec2", DeploymentStatus.ERROR, "access denied", execution.id
        )
        assert record.table_name == "ec2"
        assert record.status is DeploymentStatus.ERROR
        assert record.description == "access denied"
        assert record.execution_id == execution.id


class TestLatestStatuses:
    """Latest record per (table_name, execution_id)."""

    def test_highest_id_wins(self, session):
        session.add(Execution(id=1, name="run"))
        session.add_all(
            [
                ResourceStatus(id=1, table_name="T", status=0, description="fetching",
                               execution_id=1),
                ResourceStatus(id=5, table_name="T", status=2, description="done",
                               execution_id=1),
            ]
        )
        session.flush()

        latest = repo.get_latest_statuses(session)
        assert len(latest) == 1
        assert latest[0].id == 5
        assert latest[0].status is DeploymentStatus.FINISHED
        assert latest[0].description == "done"

    def test_one_record_per_pair_across_executions(self, session):
        first = repo.create_execution(session, "first")
        second = repo.create_execution(session, "second")
        repo.create_status(session, "ec2", DeploymentStatus.FETCHING, "", first.id)
        repo.create_status(session, "ec2", DeploymentStatus.FINISHED, "", first.id)
        repo.create_status(session, "lambda", DeploymentStatus.ERROR, "timeout", first.id)
        repo.create_status(session, "ec2", DeploymentStatus.FETCHING, "", second.id)

        latest = repo.get_latest_statuses(session)
        pairs = {(r.table_name, r.execution_id): r.status for r in latest}
        assert pairs == {
            ("ec2", first.id): DeploymentStatus.FINISHED,
            ("lambda", first.id): DeploymentStatus.ERROR,
            ("ec2", second.id): DeploymentStatus.FETCHING,
        }

    def test_older_records_are_kept(self, session):
        execution = repo.create_execution(session, "run")
        repo.create_status(session, "ec2", DeploymentStatus.FETCHING, "", execution.id)
        repo.create_status(session, "ec2", DeploymentStatus.FINISHED, "", execution.id)

        assert session.query(ResourceStatus).count() == 2
        assert len(repo.get_latest_statuses(session)) == 1

    def test_empty_ledger(self, session):
        assert repo.get_latest_statuses(session) == []

    def test_missing_ledger_raises_query_error(self, session):
        session.execute(text("DROP TABLE resource_status"))
        with pytest.raises(QueryError):
            repo.get_latest_statuses(session)
