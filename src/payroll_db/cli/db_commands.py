"""Database management commands."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

console = Console()

db_app = typer.Typer(
    name="db",
    help="Database management operations",
    no_args_is_help=True,
)


def _print_counts(counts: dict[str, int]) -> None:
    table = Table(title="Created rows")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", style="magenta", justify="right")
    for name, count in counts.items():
        table.add_row(name, str(count))
    console.print(table)


@db_app.command(name="init")
def init_database(
    db_url: Annotated[
        Optional[str],
        typer.Option("--url", help="Database URL (default: $PAYROLL_DB_URL or sqlite:///payroll.db)"),
    ] = None,
    seed: Annotated[
        bool,
        typer.Option("--seed/--no-seed", help="Load the sample companies, users and payments"),
    ] = True,
) -> None:
    """
    Initialize database schema (idempotent).

    Creates all tables and optionally loads the sample data.
    Safe to run multiple times.
    """
    from sqlalchemy import inspect

    from payroll_db.db import create_db_and_tables, get_engine, get_session, import_test_data

    engine = get_engine(db_url)
    console.print(f"Database: {engine.url}")

    existing_tables = inspect(engine).get_table_names()
    if existing_tables:
        console.print(
            f"[green]✓[/green] Schema already present ({len(existing_tables)} tables)"
        )
    else:
        create_db_and_tables(engine)
        console.print("[green]✓[/green] Tables created")

    if seed:
        with get_session(engine) as session:
            counts = import_test_data(session)
        _print_counts(counts)

    engine.dispose()


@db_app.command(name="seed")
def seed_database(
    db_url: Annotated[
        Optional[str],
        typer.Option("--url", help="Database URL (default: $PAYROLL_DB_URL or sqlite:///payroll.db)"),
    ] = None,
) -> None:
    """Load the sample data into an initialized database."""
    from payroll_db.db import get_engine, get_session, import_test_data

    engine = get_engine(db_url)
    with get_session(engine) as session:
        counts = import_test_data(session)
    _print_counts(counts)
    engine.dispose()
