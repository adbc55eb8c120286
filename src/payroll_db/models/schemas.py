"""Pydantic schemas for CLI/JSON export boundaries.

These schemas are used ONLY at external boundaries (JSON export from the
CLI). The query layer returns ORM objects and ``Row`` tuples directly.

Design Pattern
--------------
- ORM objects for internal operations (query layer)
- Pydantic for serialization at boundaries
- Use ``from_attributes=True`` (ConfigDict) to convert ORM -> Pydantic

Examples
--------
>>> from payroll_db.models.schemas import UserResponse
>>> users = dao.find_all(session)
>>> response = UserResponse.model_validate(users[0])
>>> print(response.model_dump_json(indent=2))
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "CompanyResponse",
    "UserResponse",
    "PaymentResponse",
    "CompanyAverageResponse",
    "UserAverageResponse",
    "CompanyBirthDateResponse",
]


# ============================================================================
# Entity Schemas
# ============================================================================


class CompanyResponse(BaseModel):
    """Schema for exporting a Company."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class UserResponse(BaseModel):
    """Schema for exporting a User."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    firstname: str
    lastname: str
    birth_date: date
    company_id: int | None = None


class PaymentResponse(BaseModel):
    """Schema for exporting a Payment."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: int = Field(..., ge=0)
    receiver_id: int


# ============================================================================
# Aggregate Row Schemas
# ============================================================================


class CompanyAverageResponse(BaseModel):
    """Company name with the average payment of its users."""

    company_name: str
    avg_amount: float | None = Field(
        None,
        description="Average payment amount (None when no payments matched)",
    )


class UserAverageResponse(BaseModel):
    """User with their average payment."""

    user: UserResponse
    avg_amount: float | None = None


class CompanyBirthDateResponse(BaseModel):
    """Company paired with one distinct employee birth date."""

    company: CompanyResponse
    birth_date: date
