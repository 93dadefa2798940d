"""Authentication schemas for request/response models.

Field contents (email format, password strength) are validated by the
identity core so that every rule violation surfaces with the same error
body and status.
"""

from pydantic import BaseModel, ConfigDict, Field

from users_api.schemas.users import AccountResponse


class RegisterRequest(BaseModel):
    """Request schema for account registration."""

    full_name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address, used as login")
    password: str = Field(..., description="Password (not empty)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "full_name": "Alice Example",
                "email": "alice@example.com",
                "password": "securepassword123",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for login."""

    email: str
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "securepassword123",
            },
        },
    )


class LogoutRequest(BaseModel):
    """Request schema for logout."""

    token: str


class ForgotPasswordRequest(BaseModel):
    """Request schema for requesting a password reset email."""

    email: str


class RestorePasswordRequest(BaseModel):
    """Request schema for setting a new password with a reset token."""

    token: str
    new_password: str


class TokenResponse(BaseModel):
    """Response schema carrying a freshly issued session token."""

    token: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."},
        },
    )


class LoginResponse(BaseModel):
    """Response schema for a successful login."""

    token: str
    user: AccountResponse
