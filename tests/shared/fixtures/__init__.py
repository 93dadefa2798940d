"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    db_session,
    postgres_container,
    postgres_engine,
    postgres_session,
    sqlite_engine,
    store_session,
)
from tests.shared.fixtures.factories import TestAccountFactory

__all__ = [
    "db_session",
    "postgres_container",
    "postgres_engine",
    "postgres_session",
    "sqlite_engine",
    "store_session",
    "TestAccountFactory",
]
