from users_identity.domain.account.repositories.account_repository import (
    AccountRepository,
)

__all__ = ["AccountRepository"]
