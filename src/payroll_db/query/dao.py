"""Read-only queries over users, companies and payments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from payroll_db.constants import ResultShape
from payroll_db.models.orm import Company, Payment, User
from payroll_db.query.spec import Join, QuerySpec, fetch

if TYPE_CHECKING:
    from datetime import date

    from sqlalchemy.engine import Row
    from sqlalchemy.orm import Session

__all__ = ["QUERY_CATALOG", "UserDao"]


def _global_avg_amount():
    """Scalar subquery: average amount over every payment."""
    return select(func.avg(Payment.amount)).scalar_subquery()


class UserDao:
    """
    Named read queries over the User, Company and Payment tables.

    The DAO holds no state; every method runs inside the session passed by
    the caller and never commits, rolls back or closes it. Unknown names
    produce an empty list or None rather than an error.

    Examples
    --------
    >>> dao = UserDao()
    >>> with get_session(engine) as session:
    ...     google = dao.find_all_by_company_name(session, "Google")
    """

    __slots__ = ()

    def find_all(self, session: Session) -> list[User]:
        """Return every user."""
        return fetch(session, QuerySpec(name="find_all", columns=(User,)))

    def find_all_by_first_name(self, session: Session, first_name: str) -> list[User]:
        """Return users whose first name equals ``first_name`` (case-sensitive)."""
        return fetch(
            session,
            QuerySpec(
                name="find_all_by_first_name",
                columns=(User,),
                where=(User.firstname == first_name,),
            ),
        )

    def find_limited_users_ordered_by_birthday(
        self, session: Session, limit: int
    ) -> list[User]:
        """
        Return the first ``limit`` users ordered by birth date ascending.

        Raises
        ------
        ValueError
            If ``limit`` is not a positive integer
        """
        return fetch(
            session,
            QuerySpec(
                name="find_limited_users_ordered_by_birthday",
                columns=(User,),
                order_by=(User.birth_date.asc(),),
                limit=limit,
            ),
        )

    def find_all_by_company_name(self, session: Session, company_name: str) -> list[User]:
        """Return the employees of the company named ``company_name``."""
        return fetch(
            session,
            QuerySpec(
                name="find_all_by_company_name",
                columns=(User,),
                source=Company,
                joins=(Join(Company.users),),
                where=(Company.name == company_name,),
            ),
        )

    def find_all_payments_by_company_name(
        self, session: Session, company_name: str
    ) -> list[Payment]:
        """
        Return payments received by employees of ``company_name``.

        Ordered by receiver first name, then by amount.
        """
        return fetch(
            session,
            QuerySpec(
                name="find_all_payments_by_company_name",
                columns=(Payment,),
                source=Company,
                joins=(Join(Company.users), Join(User.payments)),
                where=(Company.name == company_name,),
                order_by=(User.firstname.asc(), Payment.amount.asc()),
            ),
        )

    def find_average_payment_amount_by_first_and_last_names(
        self, session: Session, first_name: str, last_name: str
    ) -> float | None:
        """Return the average payment of the named user, or None if they have none."""
        return fetch(
            session,
            QuerySpec(
                name="find_average_payment_amount_by_first_and_last_names",
                columns=(func.avg(Payment.amount),),
                source=Payment,
                joins=(Join(Payment.receiver),),
                where=(User.firstname == first_name, User.lastname == last_name),
                shape=ResultShape.SCALAR,
            ),
        )

    def find_company_names_with_avg_user_payments_ordered_by_company_name(
        self, session: Session
    ) -> list[Row[tuple[str, float]]]:
        """
        Return ``(company name, average payment)`` per company, ordered by name.

        Companies without any paid employee are excluded by the inner joins.
        """
        return fetch(
            session,
            QuerySpec(
                name="find_company_names_with_avg_user_payments_ordered_by_company_name",
                columns=(Company.name, func.avg(Payment.amount)),
                source=Company,
                joins=(Join(Company.users), Join(User.payments)),
                group_by=(Company.name,),
                order_by=(Company.name.asc(),),
                shape=ResultShape.ROWS,
            ),
        )

    def find_users_with_avg_payment_above_global_avg(
        self, session: Session
    ) -> list[Row[tuple[User, float]]]:
        """
        Return ``(user, average payment)`` for users paid above the global average.

        The global average is taken over all payments; the comparison is
        applied to each user's grouped average. Ordered by first name.
        """
        avg_amount = func.avg(Payment.amount)
        return fetch(
            session,
            QuerySpec(
                name="find_users_with_avg_payment_above_global_avg",
                columns=(User, avg_amount),
                source=User,
                joins=(Join(User.payments),),
                group_by=(User.id,),
                having=(avg_amount > _global_avg_amount(),),
                order_by=(User.firstname.asc(),),
                shape=ResultShape.ROWS,
            ),
        )

    def find_users_avg_payments(self, session: Session) -> list[Row[tuple[User, float]]]:
        """Return ``(user, average payment)`` for every user with payments."""
        return fetch(
            session,
            QuerySpec(
                name="find_users_avg_payments",
                columns=(User, func.avg(Payment.amount)),
                source=Payment,
                joins=(Join(Payment.receiver),),
                group_by=(User.id,),
                shape=ResultShape.ROWS,
            ),
        )

    def find_users_with_avg_payment_at_most_global_avg(
        self, session: Session
    ) -> list[Row[tuple[User, float]]]:
        """
        Return ``(user, average payment)`` for users paid at most the global average.

        Like :meth:`find_users_with_avg_payment_above_global_avg`, the bound is
        applied to the grouped average (HAVING), not to individual payments.
        Ordered by last name descending, then average descending.
        """
        avg_amount = func.avg(Payment.amount)
        return fetch(
            session,
            QuerySpec(
                name="find_users_with_avg_payment_at_most_global_avg",
                columns=(User, avg_amount),
                source=User,
                joins=(Join(User.payments),),
                group_by=(User.id,),
                having=(avg_amount <= _global_avg_amount(),),
                order_by=(User.lastname.desc(), avg_amount.desc()),
                shape=ResultShape.ROWS,
            ),
        )

    def find_payments_by_last_name(self, session: Session, last_name: str) -> list[Payment]:
        """Return payments received by users with last name ``last_name``."""
        return fetch(
            session,
            QuerySpec(
                name="find_payments_by_last_name",
                columns=(Payment,),
                source=Payment,
                joins=(Join(Payment.receiver),),
                where=(User.lastname == last_name,),
            ),
        )

    def find_users_ordered_by_avg_payments(self, session: Session) -> list[User]:
        """
        Return all users ordered by average payment, highest first.

        Users without payments are kept by the outer join and sort last.
        """
        return fetch(
            session,
            QuerySpec(
                name="find_users_ordered_by_avg_payments",
                columns=(User,),
                source=User,
                joins=(Join(User.payments, outer=True),),
                group_by=(User.id,),
                order_by=(func.avg(Payment.amount).desc().nulls_last(), User.id.asc()),
            ),
        )

    def find_company_birth_dates(self, session: Session) -> list[Row[tuple[Company, date]]]:
        """
        Return ``(company, birth date)`` for each distinct employee birth date.

        Ordered by company name, then birth date.
        """
        return fetch(
            session,
            QuerySpec(
                name="find_company_birth_dates",
                columns=(Company, User.birth_date),
                source=User,
                joins=(Join(User.company),),
                group_by=(Company.id, User.birth_date),
                order_by=(Company.name.asc(), User.birth_date.asc()),
                shape=ResultShape.ROWS,
            ),
        )

    def count_users_in_company(self, session: Session, company_name: str) -> int | None:
        """Return the number of employees of ``company_name``, or None if it has none."""
        return fetch(
            session,
            QuerySpec(
                name="count_users_in_company",
                columns=(func.count(User.id),),
                source=User,
                joins=(Join(User.company),),
                where=(Company.name == company_name,),
                group_by=(Company.name,),
                shape=ResultShape.SCALAR,
            ),
        )


# CLI command name -> (UserDao method, description)
QUERY_CATALOG: dict[str, tuple[str, str]] = {
    "users": ("find_all", "All users"),
    "by-first-name": ("find_all_by_first_name", "Users with the given first name"),
    "oldest": (
        "find_limited_users_ordered_by_birthday",
        "First N users by birth date",
    ),
    "company-users": ("find_all_by_company_name", "Employees of a company"),
    "company-payments": (
        "find_all_payments_by_company_name",
        "Payments to a company's employees",
    ),
    "user-avg": (
        "find_average_payment_amount_by_first_and_last_names",
        "Average payment of one user",
    ),
    "company-avgs": (
        "find_company_names_with_avg_user_payments_ordered_by_company_name",
        "Average payment per company",
    ),
    "above-avg": (
        "find_users_with_avg_payment_above_global_avg",
        "Users paid above the global average",
    ),
    "user-avgs": ("find_users_avg_payments", "Average payment per user"),
    "at-most-avg": (
        "find_users_with_avg_payment_at_most_global_avg",
        "Users paid at most the global average",
    ),
    "last-name-payments": (
        "find_payments_by_last_name",
        "Payments to users with a last name",
    ),
    "by-avg": (
        "find_users_ordered_by_avg_payments",
        "Users ordered by average payment",
    ),
    "birth-dates": (
        "find_company_birth_dates",
        "Company and employee birth date pairs",
    ),
    "count": ("count_users_in_company", "Number of employees in a company"),
}
