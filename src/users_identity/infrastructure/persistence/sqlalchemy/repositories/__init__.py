# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for identity management."""

from users_identity.infrastructure.persistence.sqlalchemy.repositories.account_repository import (
    AccountRepositorySQLAlchemy,
)
from users_identity.infrastructure.persistence.sqlalchemy.repositories.password_reset_token_repository import (
    PasswordResetTokenRepositorySQLAlchemy,
)

__all__ = [
    "AccountRepositorySQLAlchemy",
    "PasswordResetTokenRepositorySQLAlchemy",
]
