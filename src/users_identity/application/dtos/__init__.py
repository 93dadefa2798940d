"""Data transfer objects for the identity application layer."""

from users_identity.application.dtos.account_dtos import (
    LoginResult,
    RestorePasswordData,
    UpdateAccountData,
)

__all__ = [
    "LoginResult",
    "RestorePasswordData",
    "UpdateAccountData",
]
