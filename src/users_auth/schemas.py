"""Auth schemas and data structures.

These are simple data classes used for transferring token
data between components.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenPayload:
    """Decoded session token payload.

    This represents the data extracted from a verified JWT token.

    Attributes
    ----------
    account_id
        The numeric identifier of the account
    email
        The account's email address at issue time
    role
        The account's role at issue time ("user" or "admin")
    exp
        Token expiration timestamp
    """

    account_id: int
    email: str
    role: str
    exp: datetime
