"""Query layer: query specifications and the user DAO."""

from __future__ import annotations

__all__ = [
    "QUERY_CATALOG",
    "Join",
    "QuerySpec",
    "ResultShape",
    "UserDao",
    "fetch",
]

from .dao import QUERY_CATALOG, UserDao
from .spec import Join, QuerySpec, ResultShape, fetch
