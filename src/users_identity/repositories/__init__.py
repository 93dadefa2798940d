"""Abstract repository interfaces outside the account aggregate."""

from users_identity.repositories.password_reset_token_repository import (
    PasswordResetTokenData,
    PasswordResetTokenRepository,
)

__all__ = [
    "PasswordResetTokenData",
    "PasswordResetTokenRepository",
]
