"""
Pytest configuration for users_identity integration tests.

Repository tests run against SQLite by default and additionally against
an ephemeral PostgreSQL instance when integration tests are enabled.
"""

import pytest

from tests.shared.fixtures.database import (
    db_session,
    postgres_container,
    postgres_engine,
    postgres_session,
    sqlite_engine,
    store_session,
)
from users_auth import JWTService, PasswordHashingService
from users_identity import Notifier
from users_identity.application.services import (
    AccessControlService,
    ActivationService,
    SessionService,
)
from users_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    PasswordResetTokenRepositorySQLAlchemy,
)

__all__ = [
    "db_session",
    "postgres_container",
    "postgres_engine",
    "postgres_session",
    "sqlite_engine",
    "store_session",
]

JWT_SECRET = "integration-test-secret"
API_BASE_URL = "http://localhost:8000"
FRONTEND_URL = "http://localhost:3000"


class RecordingNotifier(Notifier):
    """Notifier that keeps every link it was asked to send."""

    def __init__(self):
        self.activation_links: list[tuple[str, str]] = []
        self.reset_links: list[tuple[str, str]] = []

    def send_activation_email(self, to_email: str, activation_link: str) -> None:
        self.activation_links.append((to_email, activation_link))

    def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        self.reset_links.append((to_email, reset_link))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key=JWT_SECRET)


@pytest.fixture
def account_repository(db_session) -> AccountRepositorySQLAlchemy:
    return AccountRepositorySQLAlchemy(db_session)


@pytest.fixture
def activation_service(account_repository) -> ActivationService:
    return ActivationService(account_repository, api_base_url=API_BASE_URL)


@pytest.fixture
def session_service(
    db_session,
    account_repository,
    jwt_service,
    activation_service,
    notifier,
) -> SessionService:
    return SessionService(
        account_repository=account_repository,
        token_repository=PasswordResetTokenRepositorySQLAlchemy(db_session),
        password_service=PasswordHashingService(rounds=4),
        jwt_service=jwt_service,
        activation_service=activation_service,
        notifier=notifier,
        frontend_base_url=FRONTEND_URL,
    )


@pytest.fixture
def access_control(jwt_service, account_repository) -> AccessControlService:
    return AccessControlService(jwt_service, account_repository)
