"""Pydantic schemas for API request/response models."""

from users_api.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RegisterRequest,
    RestorePasswordRequest,
    TokenResponse,
)
from users_api.schemas.common import ErrorResponse, HealthResponse, MessageResponse
from users_api.schemas.users import (
    AccountResponse,
    DeleteAccountRequest,
    UpdateAccountRequest,
)

__all__ = [
    # Auth
    "ForgotPasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "LogoutRequest",
    "RegisterRequest",
    "RestorePasswordRequest",
    "TokenResponse",
    # Users
    "AccountResponse",
    "DeleteAccountRequest",
    "UpdateAccountRequest",
    # Common
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
]
