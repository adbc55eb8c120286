"""Data models for payroll_db."""

from __future__ import annotations

__all__ = [
    # ORM models
    "Base",
    "Company",
    "Payment",
    "PersonalInfo",
    "User",
    # Export schemas
    "CompanyAverageResponse",
    "CompanyBirthDateResponse",
    "CompanyResponse",
    "PaymentResponse",
    "UserAverageResponse",
    "UserResponse",
]

from .orm import Base, Company, Payment, PersonalInfo, User
from .schemas import (
    CompanyAverageResponse,
    CompanyBirthDateResponse,
    CompanyResponse,
    PaymentResponse,
    UserAverageResponse,
    UserResponse,
)
