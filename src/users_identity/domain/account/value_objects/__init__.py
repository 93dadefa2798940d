"""Value objects for the account domain."""

from users_identity.domain.account.value_objects.account_role import AccountRole
from users_identity.domain.account.value_objects.account_view import AccountView
from users_identity.domain.account.value_objects.email import Email

__all__ = [
    "AccountRole",
    "AccountView",
    "Email",
]
