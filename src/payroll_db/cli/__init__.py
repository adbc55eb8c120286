"""Console script for payroll_db."""

from __future__ import annotations

import typer
from rich.console import Console

app = typer.Typer(
    name="payroll-db",
    help="Payroll database CLI - run read-only user, company and payment queries",
    no_args_is_help=True,
)
console = Console()

# Import subcommand apps
from payroll_db.cli.db_commands import db_app  # noqa: E402
from payroll_db.cli.query_commands import query_app  # noqa: E402

# Register subcommands
app.add_typer(db_app, name="db", help="Database management operations")
app.add_typer(query_app, name="query", help="Run queries against a database")


if __name__ == "__main__":
    app()
