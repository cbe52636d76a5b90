"""Tests for engine and session setup."""

import pytest
from sqlalchemy import inspect

from spendscope.db import session as db_session
from spendscope.db.errors import ConnectivityError
from spendscope.db.session import get_database_url, get_db_session, get_engine, init_db


class TestDatabaseUrl:
    def test_explicit_url_wins(self, monkeypatch):
        monkeypatch.setenv(db_session.DATABASE_URL_ENV, "sqlite:///env.db")
        assert get_database_url("sqlite:///explicit.db") == "sqlite:///explicit.db"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv(db_session.DATABASE_URL_ENV, "sqlite:///env.db")
        assert get_database_url() == "sqlite:///env.db"

    def test_default(self, monkeypatch):
        monkeypatch.delenv(db_session.DATABASE_URL_ENV, raising=False)
        assert get_database_url() == "sqlite:///data/spendscope.db"


class TestEngine:
    def test_engine_is_cached(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'cached.db'}"
        assert get_engine(url) is get_engine(url)

    def test_unreachable_database(self, tmp_path):
        """A directory cannot be opened as a SQLite database."""
        with pytest.raises(ConnectivityError):
            get_engine(f"sqlite:///{tmp_path}")

    def test_init_db_creates_ledger_tables(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'ledger.db'}"
        init_db(url)
        tables = set(inspect(get_engine(url)).get_table_names())
        assert {"executions", "resource_status"} <= tables


class TestDbSession:
    def test_commits_on_success(self, tmp_path):
        from spendscope.db import repo

        url = f"sqlite:///{tmp_path / 'commit.db'}"
        init_db(url)
        with get_db_session(url) as session:
            repo.create_execution(session, "kept")
        with get_db_session(url) as session:
            assert [e.name for e in repo.get_executions(session)] == ["kept"]

    def test_rolls_back_on_error(self, tmp_path):
        from spendscope.db import repo

        url = f"sqlite:///{tmp_path / 'rollback.db'}"
        init_db(url)
        with pytest.raises(RuntimeError):
            with get_db_session(url) as session:
                repo.create_execution(session, "discarded")
                raise RuntimeError("boom")
        with get_db_session(url) as session:
            assert repo.get_executions(session) == []
