"""SQLAlchemy mapped type helpers for consistent column definitions."""

from __future__ import annotations

from typing import Annotated

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import mapped_column

__all__ = [
    "Pk",
    "Name",
    "fk",
]

# Primary Key Type
Pk = Annotated[
    int,
    mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Primary key",
    ),
]

# String Field Types
Name = Annotated[
    str,
    mapped_column(
        String(128),
        index=True,
        comment="Name",
    ),
]


# Foreign Key Helper
def fk(
    target_table: str,
    **kwargs,
):
    """
    Create a foreign key column referencing ``{target_table}.id``.

    No ``ON DELETE`` action is configured; deleting a referenced row is
    rejected by the database rather than cascaded.

    Parameters
    ----------
    target_table : str
        Target table name (will reference {table}.id)
    **kwargs
        Additional mapped_column arguments

    Returns
    -------
    mapped_column
        Configured foreign key column (integer)

    Examples
    --------
    >>> company_id: Mapped[int | None] = fk("company", nullable=True)
    >>> receiver_id: Mapped[int] = fk("users", nullable=False, index=True)
    """
    kwargs.setdefault("comment", f"Foreign key to {target_table}.id")

    return mapped_column(
        ForeignKey(f"{target_table}.id"),
        **kwargs,
    )
