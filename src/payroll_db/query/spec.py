"""Explicit query specifications compiled to SQLAlchemy statements.

A :class:`QuerySpec` describes one read query as plain data (selected
columns, FROM entity, joins, predicates, grouping, HAVING, ordering, limit)
together with the shape of its result. :func:`fetch` compiles the spec and
executes it inside a caller-supplied session.

Examples
--------
>>> from sqlalchemy import func
>>> from payroll_db.models.orm import Payment, User
>>> spec = QuerySpec(
...     name="avg_by_user",
...     columns=(User, func.avg(Payment.amount)),
...     source=User,
...     joins=(Join(User.payments),),
...     group_by=(User.id,),
...     shape=ResultShape.ROWS,
... )
>>> rows = fetch(session, spec)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loguru import logger
from sqlalchemy import select

from payroll_db.constants import ResultShape

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from sqlalchemy.sql import Select

__all__ = ["Join", "QuerySpec", "ResultShape", "fetch"]


@dataclass(frozen=True, eq=False)
class Join:
    """Join to a relationship attribute or mapped entity.

    ``outer=True`` renders a LEFT OUTER JOIN.
    """

    target: Any
    outer: bool = False


@dataclass(frozen=True, eq=False)
class QuerySpec:
    """Specification of a single read query.

    Parameters
    ----------
    name : str
        Name used in log messages
    columns : tuple
        Selected entities and/or column expressions
    source : Any, optional
        Explicit FROM entity; joins are applied starting from it
    joins : tuple[Join, ...]
        Joins in application order
    where : tuple
        Predicates ANDed together before grouping
    group_by : tuple
        Grouping keys
    having : tuple
        Predicates ANDed together after grouping
    order_by : tuple
        Ordering clauses
    limit : int | None
        Maximum number of rows; must be a positive integer
    shape : ResultShape
        How :func:`fetch` unpacks the result

    Raises
    ------
    ValueError
        If ``limit`` is not a positive integer
    """

    name: str
    columns: tuple
    source: Any = None
    joins: tuple[Join, ...] = ()
    where: tuple = ()
    group_by: tuple = ()
    having: tuple = ()
    order_by: tuple = ()
    limit: int | None = None
    shape: ResultShape = ResultShape.ENTITIES

    def __post_init__(self) -> None:
        if self.limit is not None:
            if isinstance(self.limit, bool) or not isinstance(self.limit, int):
                msg = f"Query {self.name!r}: limit must be an integer, got {self.limit!r}"
                raise ValueError(msg)
            if self.limit <= 0:
                msg = f"Query {self.name!r}: limit must be positive, got {self.limit}"
                raise ValueError(msg)

    def compile(self) -> Select:
        """Build the SQLAlchemy ``Select`` described by this spec."""
        stmt = select(*self.columns)
        if self.source is not None:
            stmt = stmt.select_from(self.source)
        for join in self.joins:
            stmt = stmt.join(join.target, isouter=join.outer)
        if self.where:
            stmt = stmt.where(*self.where)
        if self.group_by:
            stmt = stmt.group_by(*self.group_by)
        if self.having:
            stmt = stmt.having(*self.having)
        if self.order_by:
            stmt = stmt.order_by(*self.order_by)
        if self.limit is not None:
            stmt = stmt.limit(self.limit)
        return stmt


def fetch(session: Session, spec: QuerySpec) -> Any:
    """
    Execute a query spec in ``session``.

    Does not commit, roll back or close the session.

    Parameters
    ----------
    session : Session
        Caller-owned SQLAlchemy session
    spec : QuerySpec
        Query to run

    Returns
    -------
    list | Any
        ``ENTITIES``: list of mapped objects;
        ``ROWS``: list of ``Row`` tuples;
        ``SCALAR``: single value, or None when the query produced no row
        or a NULL aggregate
    """
    logger.debug(f"fetch({spec.name!r}) shape={spec.shape.value}")
    result = session.execute(spec.compile())

    if spec.shape is ResultShape.ENTITIES:
        return list(result.scalars().all())
    if spec.shape is ResultShape.ROWS:
        return list(result.all())
    return result.scalar_one_or_none()
