"""Abstract repository interface for password reset tokens."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class PasswordResetTokenData:
    """Immutable password reset token data."""

    id: UUID
    account_id: int
    token_hash: str
    expires_at: datetime
    used_at: datetime | None
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check if the token has expired."""
        return now > self.expires_at

    def is_used(self) -> bool:
        """Check if the token has been used."""
        return self.used_at is not None


class PasswordResetTokenRepository(ABC):
    """Abstract repository for password reset tokens."""

    @abstractmethod
    async def create(
        self,
        account_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> UUID:
        """Create a new password reset token.

        Parameters
        ----------
        account_id
            The account's identifier
        token_hash
            SHA-256 hash of the raw token
        expires_at
            When the token expires

        Returns
        -------
        The token's unique identifier
        """

    @abstractmethod
    async def find_valid_by_hash(
        self,
        token_hash: str,
    ) -> PasswordResetTokenData | None:
        """Find a valid (unused, unexpired) token by its hash.

        Parameters
        ----------
        token_hash
            SHA-256 hash of the raw token

        Returns
        -------
        Token data if found and usable, None otherwise
        """

    @abstractmethod
    async def mark_used(self, token_id: UUID) -> None:
        """Mark a token as used.

        Parameters
        ----------
        token_id
            The token's unique identifier
        """

    @abstractmethod
    async def invalidate_all_for_account(self, account_id: int) -> None:
        """Invalidate all outstanding tokens for an account.

        Parameters
        ----------
        account_id
            The account's identifier
        """

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove expired tokens from the database.

        Returns
        -------
        Number of tokens deleted
        """
