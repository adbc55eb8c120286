"""Payment model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_db.models.orm.base import Base
from payroll_db.utils import Pk, fk

if TYPE_CHECKING:
    from payroll_db.models.orm.user import User


class Payment(Base):
    """
    Amount paid to a single receiving user.

    Attributes
    ----------
    id : int
        Integer primary key
    amount : int
        Non-negative amount
    receiver_id : int
        Foreign key to users (required)
    receiver : User
        Relationship to the receiving user
    """

    __tablename__ = "payment"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_payment_amount_non_negative"),
    )

    id: Mapped[Pk]

    amount: Mapped[int] = mapped_column()

    receiver_id: Mapped[int] = fk("users", nullable=False, index=True)

    # Relationships
    receiver: Mapped[User] = relationship(back_populates="payments")

    def __repr__(self) -> str:
        return f"Payment(id={self.id!r}, amount={self.amount!r}, receiver_id={self.receiver_id!r})"
