"""JWT token service.

Issues and validates the signed session tokens handed out at
registration and login.
"""

import secrets
from datetime import datetime, timedelta, timezone

import jwt

from users_auth.exceptions import InvalidTokenError
from users_auth.schemas import TokenPayload


class JWTService:
    """Service for session token creation and verification.

    Tokens are self-contained: validation needs only the secret, never a
    store lookup. Revocation is layered on top by comparing against the
    token stored on the account.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.issue(42, "user", "user@example.com")
    >>> payload = service.validate(token)
    >>> print(payload.account_id)
    42
    """

    DEFAULT_EXPIRE_HOURS = 24
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        token_expire_hours: int = DEFAULT_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        token_expire_hours
            Hours until a session token expires (default 24)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expire = timedelta(hours=token_expire_hours)

    @property
    def expire_seconds(self) -> int:
        return int(self._expire.total_seconds())

    def issue(
        self,
        account_id: int,
        role: str,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed session token.

        Parameters
        ----------
        account_id
            The account's numeric identifier
        role
            The account's role
        email
            The account's email address
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._expire)

        payload = {
            "sub": str(account_id),
            "email": email,
            "role": role,
            "iat": now,
            "exp": expire,
            # Two logins within the same second must still yield distinct tokens
            "jti": secrets.token_hex(8),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def validate(self, token: str) -> TokenPayload:
        """Verify and decode a session token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        if not token:
            raise InvalidTokenError("Token is empty")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp"]},
            )

            account_id = int(payload["sub"])
            email = payload["email"]
            role = payload["role"]
            exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)

            if not isinstance(email, str) or not isinstance(role, str):
                msg = "email and role claims must be strings"
                raise ValueError(msg)

            return TokenPayload(
                account_id=account_id,
                email=email,
                role=role,
                exp=exp,
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
