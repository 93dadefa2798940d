from users_identity.domain.account.aggregates.account import Account, clean_full_name

__all__ = ["Account", "clean_full_name"]
