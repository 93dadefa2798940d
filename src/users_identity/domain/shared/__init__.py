"""Shared domain building blocks."""

from users_identity.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ErrorKind,
    ForbiddenError,
    InternalError,
    UnauthorizedError,
    ValidationError,
)
from users_identity.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ErrorKind",
    "ForbiddenError",
    "InternalError",
    "UnauthorizedError",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
