"""SQLAlchemy model for the Account aggregate."""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from users_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)


class AccountModel(IdentityBase, TimestampMixin):
    """SQLAlchemy model for persisting Account aggregates.

    The session token column holds the single current session token; an
    empty string means no active session.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    session_token: Mapped[str] = mapped_column(
        String(1024),
        default="",
        nullable=False,
        index=True,
    )
    is_activated: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    activation_link: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(20), default="user", nullable=False)

    def __repr__(self) -> str:
        return f"<AccountModel(id={self.id}, email={self.email}, role={self.role})>"
