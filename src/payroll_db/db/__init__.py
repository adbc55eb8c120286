"""Database package for payroll_db."""

from __future__ import annotations

__all__ = [
    "create_db_and_tables",
    "get_engine",
    "get_session",
    "resolve_database_url",
    # Sample data
    "import_test_data",
]

from .config import create_db_and_tables, get_engine, get_session, resolve_database_url
from .seed import import_test_data
