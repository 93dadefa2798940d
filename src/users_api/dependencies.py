"""FastAPI dependency injection for the Users API.

Provides dependencies for:
- Database sessions
- Authentication (bearer token, current account, admin check)
- Service instances
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from users_api.config import get_api_settings
from users_auth import JWTService, PasswordHashingService, TokenPayload
from users_config.settings import Settings, get_settings
from users_identity.application.ports import Notifier
from users_identity.application.services import (
    AccessControlService,
    ActivationService,
    SessionService,
)
from users_identity.domain.account import Account, AccountRole
from users_identity.domain.shared import UnauthorizedError
from users_identity.infrastructure.email import EmailService
from users_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    IdentityBase,
    PasswordResetTokenRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for file-based SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    One session per request. Routers commit on success; anything raised
    while the request is handled rolls the session back.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Database Schema Management
# -----------------------------------------------------------------------------


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    """
    engine = engine or get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)

    logger.info("Database schema is up to date")


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        token_expire_hours=settings.jwt_access_token_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_notifier(settings: SettingsDep) -> Notifier:
    return EmailService(settings)


def get_activation_service(
    session: DBSession,
    settings: SettingsDep,
) -> ActivationService:
    return ActivationService(
        account_repository=AccountRepositorySQLAlchemy(session),
        api_base_url=settings.api_base_url,
    )


def get_session_service(  # noqa: PLR0913
    session: DBSession,
    settings: SettingsDep,
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    password_service: Annotated[PasswordHashingService, Depends(get_password_service)],
    notifier: Annotated[Notifier, Depends(get_notifier)],
    activation_service: Annotated[ActivationService, Depends(get_activation_service)],
) -> SessionService:
    """
    Get the session service with all dependencies.

    All repositories share the request's database session.
    """
    return SessionService(
        account_repository=AccountRepositorySQLAlchemy(session),
        token_repository=PasswordResetTokenRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
        activation_service=activation_service,
        notifier=notifier,
        frontend_base_url=settings.frontend_base_url,
    )


def get_access_control_service(
    session: DBSession,
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
) -> AccessControlService:
    # With a repository, logged-out tokens are rejected too
    return AccessControlService(
        jwt_service=jwt_service,
        account_repository=AccountRepositorySQLAlchemy(session),
    )


# Type aliases for injected services
Sessions = Annotated[SessionService, Depends(get_session_service)]
Activation = Annotated[ActivationService, Depends(get_activation_service)]
AccessControl = Annotated[AccessControlService, Depends(get_access_control_service)]


# -----------------------------------------------------------------------------
# Current Account (Bearer Authentication)
# -----------------------------------------------------------------------------


async def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Extract the raw token from the ``Authorization: Bearer`` header."""
    if credentials is None:
        raise UnauthorizedError
    return credentials.credentials


BearerToken = Annotated[str, Depends(get_bearer_token)]


async def get_current_account(token: BearerToken, sessions: Sessions) -> Account:
    """Load the account that holds the presented session token."""
    return await sessions.authenticate(token)


CurrentAccount = Annotated[Account, Depends(get_current_account)]


async def require_admin(
    token: BearerToken,
    access_control: AccessControl,
) -> TokenPayload:
    return await access_control.check_access(token, AccountRole.ADMIN)


AdminToken = Annotated[TokenPayload, Depends(require_admin)]
