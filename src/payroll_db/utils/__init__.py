"""Utility functions for payroll_db."""

from __future__ import annotations

__all__ = [
    # Mapped types
    "Pk",
    "Name",
    "fk",
]

from .mapped_types import Name, Pk, fk
