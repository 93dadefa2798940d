"""Account aggregate: identity, credentials and session state."""

from datetime import datetime
from typing import Union

from users_identity.domain.account.exceptions import InvalidAccountDataError
from users_identity.domain.account.value_objects import AccountRole, Email
from users_identity.domain.shared.time import utc_now

MAX_FULL_NAME_LENGTH = 255


def clean_full_name(full_name: str) -> str:
    """Strip and validate a display name."""
    cleaned = (full_name or "").strip()
    if not cleaned:
        msg = "Full name cannot be empty"
        raise InvalidAccountDataError(msg)
    if len(cleaned) > MAX_FULL_NAME_LENGTH:
        msg = f"Full name cannot exceed {MAX_FULL_NAME_LENGTH} characters"
        raise InvalidAccountDataError(msg)
    return cleaned


class Account:
    """
    Account aggregate root.

    The id is assigned by the store on insert, so a freshly created
    account has ``id is None`` until it has been persisted. An empty
    ``session_token`` means there is no active session.
    """

    def __init__(  # noqa: PLR0913
        self,
        full_name: str,
        email: Union[str, Email],
        password_hash: str,
        activation_link: str,
        role: Union[str, AccountRole] = AccountRole.USER,
        is_activated: bool = False,
        session_token: str = "",
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id
        self._full_name = clean_full_name(full_name)
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._activation_link = activation_link
        self._role = role if isinstance(role, AccountRole) else AccountRole(role)
        self._is_activated = is_activated
        self._session_token = session_token or ""
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def activation_link(self) -> str:
        return self._activation_link

    @property
    def role(self) -> AccountRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == AccountRole.ADMIN

    @property
    def is_activated(self) -> bool:
        return self._is_activated

    @property
    def session_token(self) -> str:
        return self._session_token

    @property
    def has_active_session(self) -> bool:
        return bool(self._session_token)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def assign_id(self, account_id: int) -> None:
        """Record the identifier handed out by the store."""
        if self._id is not None and self._id != account_id:
            msg = f"Account already has id {self._id}"
            raise ValueError(msg)
        self._id = account_id

    def activate(self) -> bool:
        """Mark the account as activated.

        Returns
        -------
        True if the state changed, False if it was already active
        """
        if self._is_activated:
            return False
        self._is_activated = True
        self._touch()
        return True

    def start_session(self, token: str) -> None:
        self._session_token = token
        self._touch()

    def end_session(self) -> None:
        self._session_token = ""
        self._touch()

    def holds_session(self, token: str) -> bool:
        return bool(token) and self._session_token == token

    def rename(self, full_name: str) -> None:
        self._full_name = clean_full_name(full_name)
        self._touch()

    def change_email(self, email: Union[str, Email]) -> None:
        self._email = email if isinstance(email, Email) else Email(email)
        self._touch()

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._touch()

    def promote_to_admin(self) -> None:
        self._role = AccountRole.ADMIN
        self._touch()

    def demote_to_user(self) -> None:
        self._role = AccountRole.USER
        self._touch()

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        full_name: str,
        email: Union[str, Email],
        password_hash: str,
        activation_link: str,
        role: AccountRole = AccountRole.USER,
    ) -> "Account":
        return cls(
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            activation_link=activation_link,
            role=role,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: int,
        full_name: str,
        email: Union[str, Email],
        password_hash: str,
        session_token: str,
        is_activated: bool,
        activation_link: str,
        role: Union[str, AccountRole],
        created_at: datetime,
        updated_at: datetime,
    ) -> "Account":
        return cls(
            id=id,
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            session_token=session_token,
            is_activated=is_activated,
            activation_link=activation_link,
            role=role,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"Account(id={self._id}, email={self._email.value})"
