"""Users Identity - Accounts, sessions and access control.

This module handles all identity-related concerns:
- Account registration and email activation
- Login, logout and single-session token management
- Role-based access control (user, admin)
- Profile updates, deletion and password restore

Transport layers receive plain values or a DomainException carrying an
ErrorKind; they never see store or library errors.
"""

from users_identity.application.dtos import (
    LoginResult,
    RestorePasswordData,
    UpdateAccountData,
)
from users_identity.application.ports import Notifier
from users_identity.application.services import (
    AccessControlService,
    ActivationService,
    SessionService,
)
from users_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
    AccountRole,
    AccountView,
    ActivationLinkNotFoundError,
    AdminRequiredError,
    Email,
    EmailAlreadyExistsError,
    InvalidAccountDataError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidResetTokenError,
    InvalidSessionError,
    PasswordPolicyError,
)
from users_identity.domain.shared import (
    DomainException,
    ErrorCode,
    ErrorKind,
    InternalError,
)
from users_identity.repositories import (
    PasswordResetTokenData,
    PasswordResetTokenRepository,
)

__all__ = [
    # Domain - Account
    "Account",
    "AccountRepository",
    "AccountRole",
    "AccountView",
    "Email",
    # Exceptions
    "AccountNotFoundError",
    "ActivationLinkNotFoundError",
    "AdminRequiredError",
    "DomainException",
    "EmailAlreadyExistsError",
    "ErrorCode",
    "ErrorKind",
    "InternalError",
    "InvalidAccountDataError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "InvalidResetTokenError",
    "InvalidSessionError",
    "PasswordPolicyError",
    # Repositories
    "PasswordResetTokenData",
    "PasswordResetTokenRepository",
    # Ports
    "Notifier",
    # DTOs
    "LoginResult",
    "RestorePasswordData",
    "UpdateAccountData",
    # Application Services
    "AccessControlService",
    "ActivationService",
    "SessionService",
]
