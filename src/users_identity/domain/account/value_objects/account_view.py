"""Read-only projection of an account that is safe to hand out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from users_identity.domain.account.value_objects.account_role import AccountRole

if TYPE_CHECKING:
    from users_identity.domain.account.aggregates.account import Account


@dataclass(frozen=True)
class AccountView:
    """Public account fields.

    Never carries the password hash, the session token or the
    activation link.
    """

    id: int
    full_name: str
    email: str
    is_activated: bool
    role: AccountRole

    @classmethod
    def from_account(cls, account: Account) -> AccountView:
        if account.id is None:
            msg = "Cannot project an account that has not been stored"
            raise ValueError(msg)
        return cls(
            id=account.id,
            full_name=account.full_name,
            email=account.email,
            is_activated=account.is_activated,
            role=account.role,
        )
