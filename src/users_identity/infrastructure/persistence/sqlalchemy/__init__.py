"""SQLAlchemy implementation for users_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- AccountModel: SQLAlchemy model for accounts
- PasswordResetTokenModel: SQLAlchemy model for password reset tokens
- AccountRepositorySQLAlchemy: Repository implementation for accounts
- PasswordResetTokenRepositorySQLAlchemy: Repository implementation for tokens
"""

from users_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)
from users_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
    PasswordResetTokenModel,
)
from users_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
    PasswordResetTokenRepositorySQLAlchemy,
)

__all__ = [
    "AccountModel",
    "AccountRepositorySQLAlchemy",
    "IdentityBase",
    "PasswordResetTokenModel",
    "PasswordResetTokenRepositorySQLAlchemy",
    "TimestampMixin",
]
