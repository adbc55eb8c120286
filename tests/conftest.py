"""pytest configuration for payroll_db tests."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from payroll_db.db import create_db_and_tables, get_engine, import_test_data
from payroll_db.query import UserDao


@pytest.fixture
def engine():
    """Create in-memory SQLite engine with an empty schema."""
    engine = get_engine("sqlite:///:memory:")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create SQLAlchemy session on the empty schema."""
    with Session(engine) as session:
        yield session
        session.rollback()


@pytest.fixture(scope="session")
def seeded_engine():
    """Create in-memory SQLite engine loaded with the sample data.

    Bill Gates (Microsoft), Steve Jobs and Tim Cook (Apple), Sergey Brin and
    Diane Greene (Google), with 14 payments between them.
    """
    engine = get_engine("sqlite:///:memory:")
    create_db_and_tables(engine)
    with Session(engine) as session:
        import_test_data(session)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded_session(seeded_engine):
    """Create session on the sample data; changes are rolled back."""
    with Session(seeded_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def dao():
    """Query layer under test."""
    return UserDao()
