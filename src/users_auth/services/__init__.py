"""Authentication services.

Provides password hashing and JWT session token management.
"""

from users_auth.services.jwt_service import JWTService
from users_auth.services.password_service import PasswordHashingService

__all__ = [
    "PasswordHashingService",
    "JWTService",
]
