"""Plain-value inputs and outputs of the session service."""

from dataclasses import dataclass

from users_identity.domain.account import AccountView


@dataclass(frozen=True)
class UpdateAccountData:
    """Profile changes for one account.

    Fields left as None are not changed.
    """

    account_id: int
    full_name: str | None = None
    email: str | None = None
    password: str | None = None

    def is_empty(self) -> bool:
        return self.full_name is None and self.email is None and self.password is None


@dataclass(frozen=True)
class RestorePasswordData:
    """A reset token from the restore email plus the new password."""

    token: str
    new_password: str


@dataclass(frozen=True)
class LoginResult:
    """Session token and account view returned by a successful login."""

    token: str
    account: AccountView
