"""Password hashing service using bcrypt.

Provides secure password hashing and verification with configurable
strength validation.
"""

import base64
import hashlib
import secrets
from functools import lru_cache

import bcrypt

from users_auth.exceptions import WeakPasswordError


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    digest = base64.b64encode(secrets.token_bytes(32))
    return bcrypt.hashpw(digest, salt).decode("utf-8")


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.
    Strength validation is separate from hashing so that callers decide
    when a password is new input and when it is only being checked.

    bcrypt reads at most 72 bytes of input, so every password is first
    reduced to a base64-encoded SHA-256 digest (44 bytes). Passwords that
    share a long prefix therefore still hash differently.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    # Upper bound on accepted input
    MAX_BYTES = 1024

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which is a good balance of security and performance.
            Higher values are more secure but slower.
        """
        self._rounds = rounds

    @staticmethod
    def _prehash(password: str) -> bytes:
        digest = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(digest)

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash, of any length

        Returns
        -------
        The bcrypt hash as a string
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(self._prehash(password), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                self._prehash(password),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError, AttributeError):
            # Invalid hash format
            return False

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets strength requirements.

        Current requirements:
        - Not empty
        - Maximum 1024 bytes when UTF-8 encoded

        Parameters
        ----------
        password
            The password to validate

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash needs to be rehashed.

        After changing the rounds setting, existing hashes can be
        identified for rehashing on next login.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                current_rounds = int(parts[2])
                return current_rounds != self._rounds
        except (ValueError, IndexError):
            pass
        return True

    def dummy_hash(self) -> str:
        """Return a hash no password matches, with the configured work factor.

        Verifying against it takes as long as a real check, so lookups of
        unknown accounts cost the same as failed logins.
        """
        return _dummy_hash(self._rounds)
