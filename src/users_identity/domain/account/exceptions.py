"""Account domain exceptions.

Each exception carries its ErrorKind through the shared hierarchy so the
transport layer never has to know about individual types.
"""

from users_identity.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
)

# Login failures share one message so callers cannot test which emails exist
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_EMAIL)


class InvalidAccountDataError(ValidationError):
    """Raised when profile fields are malformed."""


class PasswordPolicyError(ValidationError):
    """Raised when a new password fails the strength rules."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.WEAK_PASSWORD)


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email address is already registered",
            ErrorCode.EMAIL_ALREADY_EXISTS,
            {"email": email},
        )


class AccountNotFoundError(EntityNotFoundError):
    """Account not found."""

    def __init__(self, reference: str | int) -> None:
        self.reference = reference
        super().__init__(
            "Account not found",
            ErrorCode.ACCOUNT_NOT_FOUND,
            {"reference": str(reference)},
        )


class ActivationLinkNotFoundError(EntityNotFoundError):
    """No account carries the given activation link."""

    def __init__(self, link: str) -> None:
        self.link = link
        super().__init__(
            "Activation link not found",
            ErrorCode.ACTIVATION_LINK_NOT_FOUND,
        )


class InvalidCredentialsError(UnauthorizedError):
    """Raised when email or password is incorrect during login."""

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE, ErrorCode.INVALID_CREDENTIALS)


class InvalidSessionError(UnauthorizedError):
    """Raised when a session token is invalid, expired or revoked."""

    def __init__(
        self,
        message: str = "Invalid or expired token",
        reason: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.INVALID_TOKEN,
            {"reason": reason} if reason else None,
        )


class InvalidResetTokenError(UnauthorizedError):
    """Raised when a password reset token is invalid, used or expired."""

    def __init__(self) -> None:
        super().__init__(
            "Invalid or expired password reset token",
            ErrorCode.INVALID_RESET_TOKEN,
        )


class AdminRequiredError(ForbiddenError):
    """Raised when an administrative action is attempted without admin role."""

    def __init__(self, required_role: str = "admin") -> None:
        super().__init__(
            "Insufficient privileges",
            ErrorCode.ADMIN_REQUIRED,
            {"required_role": required_role},
        )
