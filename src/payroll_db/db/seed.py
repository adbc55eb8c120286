"""Sample data importer.

Loads the fixed set of companies, users and payments that the query tests
and the CLI demo run against.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from loguru import logger
from sqlalchemy import select

from payroll_db.models.orm import Company, Payment, PersonalInfo, User

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

__all__ = ["SEED_COMPANIES", "SEED_USERS", "import_test_data"]

SEED_COMPANIES = ("Microsoft", "Apple", "Google")

# (firstname, lastname, birth date, company, payment amounts)
SEED_USERS = (
    ("Bill", "Gates", date(1955, 10, 28), "Microsoft", (100, 300, 500)),
    ("Steve", "Jobs", date(1955, 2, 24), "Apple", (250, 600, 500)),
    ("Sergey", "Brin", date(1973, 8, 21), "Google", (500, 500, 500)),
    ("Tim", "Cook", date(1960, 11, 1), "Apple", (400, 300)),
    ("Diane", "Greene", date(1955, 1, 15), "Google", (300, 300, 300)),
)


def import_test_data(session: Session) -> dict[str, int]:
    """Insert the sample companies, users and payments.

    Safe to call multiple times: companies are matched by name and users by
    first and last name; payments are only added for newly created users.

    Parameters
    ----------
    session : Session
        Database session

    Returns
    -------
    dict[str, int]
        Counts of created entries: {"company": N, "user": M, "payment": K}

    Examples
    --------
    >>> with get_session(engine) as session:
    ...     counts = import_test_data(session)
    ...     print(counts)
    {'company': 3, 'user': 5, 'payment': 14}
    """
    counts = {"company": 0, "user": 0, "payment": 0}

    companies: dict[str, Company] = {}
    for name in SEED_COMPANIES:
        company = session.scalar(select(Company).where(Company.name == name))
        if company is None:
            company = Company(name=name)
            session.add(company)
            counts["company"] += 1
        companies[name] = company

    for firstname, lastname, birth_date, company_name, amounts in SEED_USERS:
        stmt = select(User).where(
            User.firstname == firstname,
            User.lastname == lastname,
        )
        if session.scalar(stmt) is not None:
            continue

        user = User(
            personal_info=PersonalInfo(firstname, lastname, birth_date),
            company=companies[company_name],
        )
        session.add(user)
        counts["user"] += 1

        for amount in amounts:
            session.add(Payment(amount=amount, receiver=user))
            counts["payment"] += 1

    session.commit()
    logger.info(f"import_test_data created {counts}")
    return counts
