"""Tests for the payroll-db command line interface."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

from payroll_db.cli import app
from payroll_db.query import QUERY_CATALOG, UserDao

runner = CliRunner()


@pytest.fixture
def db_url(tmp_path):
    """File-based SQLite database initialized with the sample data."""
    url = f"sqlite:///{tmp_path / 'payroll.db'}"
    result = runner.invoke(app, ["db", "init", "--url", url])
    assert result.exit_code == 0, result.output
    return url


def _json(args: list[str]):
    result = runner.invoke(app, [*args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestDbCommands:
    """db init / db seed."""

    def test_init_creates_and_seeds(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'payroll.db'}"

        result = runner.invoke(app, ["db", "init", "--url", url])

        assert result.exit_code == 0, result.output
        assert "Tables created" in result.output

    def test_init_is_idempotent(self, db_url):
        result = runner.invoke(app, ["db", "init", "--url", db_url])

        assert result.exit_code == 0, result.output
        assert "Schema already present" in result.output

        users = _json(["query", "users", "--db", db_url])
        assert len(users) == 5

    def test_init_without_seed(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'payroll.db'}"

        result = runner.invoke(app, ["db", "init", "--url", url, "--no-seed"])
        assert result.exit_code == 0, result.output

        assert _json(["query", "users", "--db", url]) == []

        result = runner.invoke(app, ["db", "seed", "--url", url])
        assert result.exit_code == 0, result.output
        assert len(_json(["query", "users", "--db", url])) == 5


class TestQueryCommands:
    """query subcommands."""

    def test_catalog_matches_dao(self):
        for method, _ in QUERY_CATALOG.values():
            assert callable(getattr(UserDao, method))

    def test_list(self):
        result = runner.invoke(app, ["query", "list"])

        assert result.exit_code == 0, result.output
        assert "above-avg" in result.output

    def test_catalog_names_are_commands(self, db_url):
        for name in QUERY_CATALOG:
            result = runner.invoke(app, ["query", name, "--help"])
            assert result.exit_code == 0, f"{name}: {result.output}"

    def test_users_table(self, db_url):
        result = runner.invoke(app, ["query", "users", "--db", db_url])

        assert result.exit_code == 0, result.output
        assert "Bill Gates" in result.output

    def test_company_users(self, db_url):
        users = _json(["query", "company-users", "Google", "--db", db_url])

        assert sorted(u["firstname"] for u in users) == ["Diane", "Sergey"]

    def test_oldest(self, db_url):
        users = _json(["query", "oldest", "--limit", "2", "--db", db_url])

        assert [u["firstname"] for u in users] == ["Diane", "Steve"]

    def test_oldest_rejects_non_positive_limit(self, db_url):
        result = runner.invoke(app, ["query", "oldest", "--limit", "0", "--db", db_url])

        assert result.exit_code == 1
        assert "limit must be positive" in result.output

    def test_company_payments(self, db_url):
        payments = _json(["query", "company-payments", "Apple", "--db", db_url])

        assert [p["amount"] for p in payments] == [250, 500, 600, 300, 400]

    def test_user_avg(self, db_url):
        assert _json(["query", "user-avg", "Bill", "Gates", "--db", db_url]) == {
            "avg_amount": 300.0
        }

    def test_user_avg_unknown_user(self, db_url):
        assert _json(["query", "user-avg", "Linus", "Torvalds", "--db", db_url]) == {
            "avg_amount": None
        }

    def test_company_avgs(self, db_url):
        rows = _json(["query", "company-avgs", "--db", db_url])

        assert [(r["company_name"], r["avg_amount"]) for r in rows] == [
            ("Apple", 410.0),
            ("Google", 400.0),
            ("Microsoft", 300.0),
        ]

    def test_above_avg(self, db_url):
        rows = _json(["query", "above-avg", "--db", db_url])

        assert [r["user"]["firstname"] for r in rows] == ["Sergey", "Steve"]

    def test_birth_dates(self, db_url):
        rows = _json(["query", "birth-dates", "--db", db_url])

        assert [r["company"]["name"] for r in rows] == [
            "Apple",
            "Apple",
            "Google",
            "Google",
            "Microsoft",
        ]

    def test_count(self, db_url):
        assert _json(["query", "count", "Google", "--db", db_url]) == {"user_count": 2}

    def test_count_unknown_company(self, db_url):
        result = runner.invoke(app, ["query", "count", "Oracle", "--db", db_url])

        assert result.exit_code == 0, result.output
        assert "no data" in result.output


class TestEmptyResults:
    """Rendering when a query matches nothing."""

    @pytest.fixture
    def empty_db_url(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'empty.db'}"
        result = runner.invoke(app, ["db", "init", "--url", url, "--no-seed"])
        assert result.exit_code == 0, result.output
        return url

    @pytest.mark.parametrize("command", ["company-avgs", "birth-dates"])
    def test_company_queries_report_no_rows(self, empty_db_url, command):
        result = runner.invoke(app, ["query", command, "--db", empty_db_url])

        assert result.exit_code == 0, result.output
        assert "No companies found" in result.output


class TestErrorHandling:
    """Only invalid query input is reported as a user error."""

    def test_export_validation_error_propagates(self, db_url, monkeypatch):
        bad_user = SimpleNamespace(
            id=1, firstname="Bill", lastname="Gates", birth_date="not-a-date", company_id=None
        )
        monkeypatch.setattr(UserDao, "find_all", lambda self, session: [bad_user])

        result = runner.invoke(app, ["query", "users", "--db", db_url, "--json"])

        assert isinstance(result.exception, ValidationError)
        assert "✗" not in result.output
