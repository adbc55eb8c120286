"""Constants and enumerations for payroll_db."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "DATABASE_URL_ENV",
    "DEFAULT_DATABASE_URL",
    "ResultShape",
]


# Environment variable consulted when no database URL is passed explicitly
DATABASE_URL_ENV = "PAYROLL_DB_URL"

DEFAULT_DATABASE_URL = "sqlite:///payroll.db"


class ResultShape(str, Enum):
    """Shape of the value returned when a query is executed."""

    ENTITIES = "entities"  # list of mapped objects (first selected entity)
    ROWS = "rows"  # list of Row tuples
    SCALAR = "scalar"  # single nullable value
