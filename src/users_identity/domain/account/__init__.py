"""Account domain manages identity, credentials and session state.

This domain handles:
- Account aggregate (id, full name, email, password hash, role)
- Activation state
- The single current session token per account
"""

from users_identity.domain.account.aggregates import Account, clean_full_name
from users_identity.domain.account.exceptions import (
    INVALID_CREDENTIALS_MESSAGE,
    AccountNotFoundError,
    ActivationLinkNotFoundError,
    AdminRequiredError,
    EmailAlreadyExistsError,
    InvalidAccountDataError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidResetTokenError,
    InvalidSessionError,
    PasswordPolicyError,
)
from users_identity.domain.account.repositories import AccountRepository
from users_identity.domain.account.value_objects import (
    AccountRole,
    AccountView,
    Email,
)

__all__ = [
    "INVALID_CREDENTIALS_MESSAGE",
    "Account",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountRole",
    "AccountView",
    "ActivationLinkNotFoundError",
    "AdminRequiredError",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidAccountDataError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "InvalidResetTokenError",
    "InvalidSessionError",
    "PasswordPolicyError",
    "clean_full_name",
]
