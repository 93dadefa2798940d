"""Account repository interface (the Account Store contract)."""

from abc import ABC, abstractmethod
from typing import Optional

from users_identity.domain.account.aggregates.account import Account


class AccountRepository(ABC):
    """Repository interface for Account aggregates.

    Each operation is expected to be individually atomic. The store is the
    final arbiter of email and activation link uniqueness.
    """

    @abstractmethod
    async def find_all(self) -> list[Account]:
        """List all accounts ordered by id."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by its exact email address."""

    @abstractmethod
    async def find_by_id(self, account_id: int) -> Optional[Account]:
        """Find an account by its id."""

    @abstractmethod
    async def find_by_activation_link(self, link: str) -> Optional[Account]:
        """Find the account that was issued the given activation link."""

    @abstractmethod
    async def insert(self, account: Account) -> int:
        """Insert a new account and return the id assigned to it.

        Raises
        ------
        EmailAlreadyExistsError
            If another account already uses the email
        """

    @abstractmethod
    async def update_token(self, account_id: int, token: str) -> None:
        """Replace the stored session token of an account."""

    @abstractmethod
    async def clear_token_by_token(self, token: str) -> bool:
        """Clear the session token on whichever account holds it.

        Returns
        -------
        True if an account held the token, False otherwise
        """

    @abstractmethod
    async def update(self, account: Account) -> None:
        """Persist the mutable fields of an existing account.

        Raises
        ------
        EmailAlreadyExistsError
            If the new email is used by another account
        """

    @abstractmethod
    async def delete(self, email: str) -> bool:
        """Permanently delete an account by email.

        Returns
        -------
        True if deleted, False if not found
        """
