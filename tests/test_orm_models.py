"""Tests for SQLAlchemy 2.0 ORM models.

Tests verify:
1. Schema creation (tables, foreign keys)
2. PersonalInfo composite mapping
3. Relationships
4. Data integrity (required receiver, foreign keys, non-negative amounts)
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError

from payroll_db.models.orm import Company, Payment, PersonalInfo, User


class TestSchemaCreation:
    """Test database schema creation."""

    def test_all_tables_created(self, engine):
        inspector = inspect(engine)

        assert set(inspector.get_table_names()) == {"company", "users", "payment"}

    def test_foreign_keys(self, engine):
        inspector = inspect(engine)

        user_fks = inspector.get_foreign_keys("users")
        payment_fks = inspector.get_foreign_keys("payment")

        assert [fk["referred_table"] for fk in user_fks] == ["company"]
        assert [fk["referred_table"] for fk in payment_fks] == ["users"]

    def test_receiver_is_required(self, engine):
        columns = {c["name"]: c for c in inspect(engine).get_columns("payment")}

        assert columns["receiver_id"]["nullable"] is False


class TestUser:
    """Test User model and PersonalInfo composite."""

    def test_personal_info_round_trip(self, session):
        info = PersonalInfo("Ada", "Lovelace", date(1815, 12, 10))
        session.add(User(personal_info=info))
        session.commit()
        session.expire_all()

        user = session.scalar(select(User).where(User.lastname == "Lovelace"))

        assert user.personal_info == info
        assert user.firstname == "Ada"
        assert user.birth_date == date(1815, 12, 10)
        assert user.full_name() == "Ada Lovelace"

    def test_company_is_optional(self, session):
        user = User(personal_info=PersonalInfo("Ada", "Lovelace", date(1815, 12, 10)))
        session.add(user)
        session.commit()

        assert user.company is None
        assert user.company_id is None

    def test_company_relationship(self, session):
        company = Company(name="Analytical Engines")
        user = User(
            personal_info=PersonalInfo("Ada", "Lovelace", date(1815, 12, 10)),
            company=company,
        )
        session.add(user)
        session.commit()

        assert company.users == [user]
        assert user.company_id == company.id


class TestPersonalInfo:
    """Test PersonalInfo helpers."""

    def test_age_before_birthday(self):
        info = PersonalInfo("Bill", "Gates", date(1955, 10, 28))

        assert info.age(today=date(2020, 10, 27)) == 64

    def test_age_on_birthday(self):
        info = PersonalInfo("Bill", "Gates", date(1955, 10, 28))

        assert info.age(today=date(2020, 10, 28)) == 65


class TestPayment:
    """Test Payment model constraints."""

    def test_payment_receiver(self, session):
        user = User(personal_info=PersonalInfo("Ada", "Lovelace", date(1815, 12, 10)))
        payment = Payment(amount=100, receiver=user)
        session.add(payment)
        session.commit()

        assert user.payments == [payment]
        assert payment.receiver_id == user.id

    def test_payment_without_receiver(self, session):
        session.add(Payment(amount=100))

        with pytest.raises(IntegrityError):
            session.flush()

    def test_payment_with_unknown_receiver(self, session):
        session.add(Payment(amount=100, receiver_id=999))

        with pytest.raises(IntegrityError):
            session.flush()

    def test_negative_amount(self, session):
        user = User(personal_info=PersonalInfo("Ada", "Lovelace", date(1815, 12, 10)))
        session.add(Payment(amount=-1, receiver=user))

        with pytest.raises(IntegrityError):
            session.flush()
