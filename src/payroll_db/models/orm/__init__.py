"""SQLAlchemy 2.0 ORM models for payroll_db.

Split into logical modules:
- base.py - Declarative base
- company.py - Company
- user.py - User and the PersonalInfo composite
- payment.py - Payment

Relationships:
- Company 1 -> * User (nullable ``users.company_id``)
- User 1 -> * Payment (required ``payment.receiver_id``)
"""

from __future__ import annotations

from payroll_db.models.orm.base import Base
from payroll_db.models.orm.company import Company
from payroll_db.models.orm.payment import Payment
from payroll_db.models.orm.user import PersonalInfo, User

__all__ = [
    "Base",
    "Company",
    "Payment",
    "PersonalInfo",
    "User",
]
