"""
Pytest configuration for API tests.

Each test gets a fresh app wired to an in-memory SQLite database. The
notifier is replaced by a mock so activation and reset links can be read
back from its calls.
"""

from collections.abc import AsyncGenerator
from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tests.shared.fixtures.database import sqlite_engine
from users_api.app import create_app
from users_api.config import get_api_settings
from users_api.dependencies import get_db_session, get_notifier
from users_config import Settings
from users_identity import Notifier
from users_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    IdentityBase,
)

__all__ = ["sqlite_engine"]

API_PREFIX = "/api/v1"
TEST_PASSWORD = "password123"
CLIENT_URL = "http://client.test/welcome"


@pytest.fixture
def api_settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret_key=SecretStr("api-test-secret"),
        bcrypt_rounds=4,
        smtp_enabled=False,
        api_base_url="http://api.test",
        client_url=CLIENT_URL,
        frontend_base_url="http://frontend.test",
    )


@pytest.fixture
def notifier() -> Mock:
    return Mock(spec=Notifier)


@pytest_asyncio.fixture
async def session_maker(sqlite_engine) -> async_sessionmaker[AsyncSession]:
    async with sqlite_engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)
    return async_sessionmaker(
        sqlite_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def app(api_settings, notifier, session_maker):
    app = create_app(api_settings)

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_notifier] = lambda: notifier
    return app


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    # ASGITransport does not run the lifespan, so tables come from session_maker
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def api():
    """Helpers for common request sequences."""
    return ApiHelpers


class ApiHelpers:
    @staticmethod
    async def register(
        client: AsyncClient,
        email: str,
        full_name: str = "Test User",
        password: str = TEST_PASSWORD,
    ) -> str:
        response = await client.post(
            f"{API_PREFIX}/auth/register",
            json={"full_name": full_name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()["token"]

    @staticmethod
    async def login(
        client: AsyncClient,
        email: str,
        password: str = TEST_PASSWORD,
    ) -> str:
        response = await client.post(
            f"{API_PREFIX}/auth/login",
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def last_activation_link(notifier: Mock) -> str:
        url = notifier.send_activation_email.call_args.kwargs["activation_link"]
        return url.rsplit("/", 1)[1]

    @staticmethod
    def last_reset_token(notifier: Mock) -> str:
        url = notifier.send_password_reset_email.call_args.kwargs["reset_link"]
        return parse_qs(urlparse(url).query)["token"][0]


@pytest.fixture
def make_admin(session_maker):
    """Promote a registered account directly in the store."""

    async def _make_admin(email: str) -> None:
        async with session_maker() as session:
            repo = AccountRepositorySQLAlchemy(session)
            account = await repo.find_by_email(email)
            account.promote_to_admin()
            await repo.update(account)
            await session.commit()

    return _make_admin
