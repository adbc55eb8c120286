"""Company model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Mapped, relationship

from payroll_db.models.orm.base import Base
from payroll_db.utils import Name, Pk

if TYPE_CHECKING:
    from payroll_db.models.orm.user import User


class Company(Base):
    """
    Employer that users belong to.

    The name is looked up by exact match but is not unique-constrained.

    Attributes
    ----------
    id : int
        Integer primary key
    name : str
        Company name
    users : list[User]
        Employees of the company (relationship)
    """

    __tablename__ = "company"

    id: Mapped[Pk]

    name: Mapped[Name]

    # Relationships (no delete cascade to users)
    users: Mapped[list[User]] = relationship(back_populates="company")

    def __repr__(self) -> str:
        return f"Company(id={self.id!r}, name={self.name!r})"
