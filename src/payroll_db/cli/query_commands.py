"""Query commands: one command per UserDao operation."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Annotated, Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Generator

    from sqlalchemy.orm import Session

    from payroll_db.query import UserDao

console = Console()

query_app = typer.Typer(
    name="query",
    help="Run queries against a database",
    no_args_is_help=True,
)

DbOption = Annotated[
    Optional[str],
    typer.Option("--db", help="Database URL (default: $PAYROLL_DB_URL or sqlite:///payroll.db)"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print results as JSON"),
]


@contextmanager
def _dao_session(db_url: str | None) -> Generator[tuple[UserDao, Session], None, None]:
    """Open a session for one command; invalid query input exits with code 1."""
    from payroll_db.db import get_engine, get_session
    from payroll_db.query import UserDao

    engine = get_engine(db_url)
    try:
        with get_session(engine) as session:
            yield UserDao(), session
    except ValidationError:
        # Export schema mismatch, not bad user input
        raise
    except ValueError as exc:
        console.print(f"[red]✗ {exc}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from exc
    finally:
        engine.dispose()


# =========================================================================
# Rendering
# =========================================================================


def _print_users(users: list[Any], title: str, as_json: bool) -> None:
    from payroll_db.models.schemas import UserResponse

    if as_json:
        console.print_json(
            data=[UserResponse.model_validate(u).model_dump(mode="json") for u in users]
        )
        return
    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title=f"{title} ({len(users)} results)")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Birth date", style="green")
    for user in users:
        table.add_row(str(user.id), user.full_name(), user.birth_date.isoformat())
    console.print(table)


def _print_payments(payments: list[Any], title: str, as_json: bool) -> None:
    from payroll_db.models.schemas import PaymentResponse

    if as_json:
        console.print_json(
            data=[PaymentResponse.model_validate(p).model_dump(mode="json") for p in payments]
        )
        return
    if not payments:
        console.print("[yellow]No payments found[/yellow]")
        return

    table = Table(title=f"{title} ({len(payments)} results)")
    table.add_column("ID", style="cyan")
    table.add_column("Receiver", style="magenta")
    table.add_column("Amount", style="green", justify="right")
    for payment in payments:
        table.add_row(str(payment.id), payment.receiver.full_name(), str(payment.amount))
    console.print(table)


def _print_user_averages(rows: list[Any], title: str, as_json: bool) -> None:
    from payroll_db.models.schemas import UserAverageResponse, UserResponse

    if as_json:
        console.print_json(
            data=[
                UserAverageResponse(
                    user=UserResponse.model_validate(user), avg_amount=avg_amount
                ).model_dump(mode="json")
                for user, avg_amount in rows
            ]
        )
        return
    if not rows:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title=f"{title} ({len(rows)} results)")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Average", style="green", justify="right")
    for user, avg_amount in rows:
        table.add_row(str(user.id), user.full_name(), f"{avg_amount:.2f}")
    console.print(table)


def _print_value(label: str, value: Any, as_json: bool) -> None:
    if as_json:
        console.print_json(data={label: value})
    elif value is None:
        console.print(f"[yellow]{label}: no data[/yellow]")
    else:
        console.print(f"{label}: [bold]{value}[/bold]")


# =========================================================================
# Commands
# =========================================================================


@query_app.command(name="list")
def list_queries() -> None:
    """List the available queries."""
    from payroll_db.query import QUERY_CATALOG

    table = Table(title="Queries")
    table.add_column("Command", style="cyan")
    table.add_column("Description")
    for name, (_, description) in QUERY_CATALOG.items():
        table.add_row(name, description)
    console.print(table)


@query_app.command(name="users")
def query_users(db_url: DbOption = None, as_json: JsonOption = False) -> None:
    """All users."""
    with _dao_session(db_url) as (dao, session):
        _print_users(dao.find_all(session), "Users", as_json)


@query_app.command(name="by-first-name")
def query_by_first_name(
    first_name: Annotated[str, typer.Argument(help="Exact first name")],
    db_url: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Users with the given first name."""
    with _dao_session(db_url) as (dao, session):
        users = dao.find_all_by_first_name(session, first_name)
        _print_users(users, f"Users named {first_name}", as_json)


@query_app.command(name="oldest")
def query_oldest(
    limit: Annotated[int, typer.Option("--limit", "-n", help="Number of users")] = 3,
    db_url: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """First N users by birth date."""
    with _dao_session(db_url) as (dao, session):
        users = dao.find_limited_users_ordered_by_birthday(session, limit)
        _print_users(users, "Oldest users", as_json)


@query_app.command(name="company-users")
def query_company_users(
    company_name: Annotated[str, typer.Argument(help="Exact company name")],
    db_url: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Employees of a company."""
    with _dao_session(db_url) as (dao, session):
        users = dao.find_all_by_company_name(session, company_name)
        _print_users(users, f"{company_name} employees", as_json)


@query_app.command(name="company-payments")
def query_company_payments(
    company_name: Annotated[str, typer.Argument(help="Exact company name")],
    db_url: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Payments to a company's employees."""
    with _dao_session(db_url) as (dao, session):
        payments = dao.find_all_payments_by_company_name(session, company_name)
        _print_payments(payments, f"{company_name} payments", as_json)


@query_app.command(name="user-avg")
def query_user_avg(
    first_name: Annotated[str, typer.Argument(help="Exact first name")],
    last_name: Annotated[str, typer.Argument(help="Exact last name")],
    db_url: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Average payment of one user."""
    with _dao_session(db_url) as (dao, session):
        value = dao.find_average_payment_amount_by_first_and_last_names(
            session, first_name, last_name
        )
        _print_value("avg_amount", value, as_json)


@query_app.command(name="company-avgs")
def query_company_avgs(db_url: DbOption = None, as_json: JsonOption = False) -> None:
    """Average payment per company."""
    from payroll_db.models.schemas import CompanyAverageResponse

    with _dao_session(db_url) as (dao, session):
        rows = dao.find_company_names_with_avg_user_payments_ordered_by_company_name(session)
        if as_json:
            console.print_json(
                data=[
                    CompanyAverageResponse(company_name=name, avg_amount=avg).model_dump()
                    for name, avg in rows
                ]
            )
            return
        if not rows:
            console.print("[yellow]No companies found[/yellow]")
            return

        table = Table(title="Average payment per company")
        table.add_column("Company", style="cyan")
        table.add_column("Average", style="green", justify="right")
        for name, avg in rows:
            table.add_row(name, f"{avg:.2f}")
        console.print(table)


@query_app.command(name="above-avg")
def query_above_avg(db_url: DbOption = None, as_json: JsonOption = False) -> None:
    """Users paid above the global average."""
    with _dao_session(db_url) as (dao, session):
        rows = dao.find_users_with_avg_payment_above_global_avg(session)
        _print_user_averages(rows, "Above global average", as_json)


@query_app.command(name="user-avgs")
def query_user_avgs(db_url: DbOption = None, as_json: JsonOption = False) -> None:
    """Average payment per user."""
    with _dao_session(db_url) as (dao, session):
        rows = dao.find_users_avg_payments(session)
        _print_user_averages(rows, "Average payment per user", as_json)


@query_app.command(name="at-most-avg")
def query_at_most_avg(db_url: DbOption = None, as_json: JsonOption = False) -> None:
    """Users paid at most the global average."""
    with _dao_session(db_url) as (dao, session):
        rows = dao.find_users_with_avg_payment_at_most_global_avg(session)
        _print_user_averages(rows, "At most global average", as_json)


@query_app.command(name="last-name-payments")
def query_last_name_payments(
    last_name: Annotated[str, typer.Argument(help="Exact last name")],
    db_url: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Payments to users with a last name."""
    with _dao_session(db_url) as (dao, session):
        payments = dao.find_payments_by_last_name(session, last_name)
        _print_payments(payments, f"Payments to {last_name}", as_json)


@query_app.command(name="by-avg")
def query_by_avg(db_url: DbOption = None, as_json: JsonOption = False) -> None:
    """Users ordered by average payment."""
    with _dao_session(db_url) as (dao, session):
        users = dao.find_users_ordered_by_avg_payments(session)
        _print_users(users, "Users by average payment", as_json)


@query_app.command(name="birth-dates")
def query_birth_dates(db_url: DbOption = None, as_json: JsonOption = False) -> None:
    """Company and employee birth date pairs."""
    from payroll_db.models.schemas import CompanyBirthDateResponse, CompanyResponse

    with _dao_session(db_url) as (dao, session):
        rows = dao.find_company_birth_dates(session)
        if as_json:
            console.print_json(
                data=[
                    CompanyBirthDateResponse(
                        company=CompanyResponse.model_validate(company),
                        birth_date=birth_date,
                    ).model_dump(mode="json")
                    for company, birth_date in rows
                ]
            )
            return
        if not rows:
            console.print("[yellow]No companies found[/yellow]")
            return

        table = Table(title="Employee birth dates")
        table.add_column("Company", style="cyan")
        table.add_column("Birth date", style="green")
        for company, birth_date in rows:
            table.add_row(company.name, birth_date.isoformat())
        console.print(table)


@query_app.command(name="count")
def query_count(
    company_name: Annotated[str, typer.Argument(help="Exact company name")],
    db_url: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Number of employees in a company."""
    with _dao_session(db_url) as (dao, session):
        value = dao.count_users_in_company(session, company_name)
        _print_value("user_count", value, as_json)
