"""Users Auth - Generic authentication primitives.

This package provides authentication building blocks that are independent
of the account domain. It handles:
- Password hashing (bcrypt)
- Session token issuing and validation (JWT)

Architecture:
    users_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from users_auth import PasswordHashingService, JWTService
"""

from users_auth.exceptions import (
    AuthError,
    InvalidTokenError,
    WeakPasswordError,
)
from users_auth.schemas import TokenPayload
from users_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "WeakPasswordError",
]
