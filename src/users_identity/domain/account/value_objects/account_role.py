from enum import Enum


class AccountRole(str, Enum):
    """Account roles (who will be admin and who not)."""

    USER = "user"
    ADMIN = "admin"
