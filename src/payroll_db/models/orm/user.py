"""User model and its embedded personal info value object."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship

from payroll_db.models.orm.base import Base
from payroll_db.utils import Pk, fk

if TYPE_CHECKING:
    from payroll_db.models.orm.company import Company
    from payroll_db.models.orm.payment import Payment


@dataclass
class PersonalInfo:
    """First name, last name and birth date of a user."""

    firstname: str
    lastname: str
    birth_date: date

    def age(self, today: date | None = None) -> int:
        """Return the number of completed years at ``today`` (default: now)."""
        today = today or date.today()
        years = today.year - self.birth_date.year
        if (today.month, today.day) < (self.birth_date.month, self.birth_date.day):
            years -= 1
        return years


class User(Base):
    """
    Employee receiving payments.

    Personal info is stored as three plain columns and exposed as the
    :class:`PersonalInfo` composite, so queries can filter and order on the
    individual columns (``User.firstname``, ``User.birth_date``, ...).

    Attributes
    ----------
    id : int
        Integer primary key
    firstname, lastname : str
        Name parts
    birth_date : date
        Date of birth
    personal_info : PersonalInfo
        Composite over the three columns above
    company_id : int | None
        Foreign key to company (a user belongs to at most one company)
    company : Company | None
        Relationship to employer
    payments : list[Payment]
        Payments received by the user
    """

    __tablename__ = "users"

    id: Mapped[Pk]

    firstname: Mapped[str] = mapped_column(String(128), index=True)

    lastname: Mapped[str] = mapped_column(String(128), index=True)

    birth_date: Mapped[date] = mapped_column(Date)

    personal_info: Mapped[PersonalInfo] = composite("firstname", "lastname", "birth_date")

    company_id: Mapped[int | None] = fk("company", nullable=True, index=True)

    # Relationships
    company: Mapped[Company | None] = relationship(back_populates="users")
    payments: Mapped[list[Payment]] = relationship(back_populates="receiver")

    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}"

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.full_name()!r})"
