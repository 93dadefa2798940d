"""
Pytest configuration for users_identity tests.

Provides account fixtures shared by unit and integration tests.
"""

import pytest

from users_identity.domain.account import Account, AccountRole


@pytest.fixture
def test_account() -> Account:
    """A persisted, activated standard account."""
    account = Account.create(
        full_name="Test User",
        email="test@example.com",
        password_hash="$2b$04$placeholderplaceholderplaceholderplaceholderplac",
        activation_link="11111111-1111-1111-1111-111111111111",
    )
    account.assign_id(1)
    account.activate()
    return account


@pytest.fixture
def admin_account() -> Account:
    """A persisted admin account."""
    account = Account.create(
        full_name="Admin User",
        email="admin@example.com",
        password_hash="$2b$04$placeholderplaceholderplaceholderplaceholderplac",
        activation_link="22222222-2222-2222-2222-222222222222",
        role=AccountRole.ADMIN,
    )
    account.assign_id(2)
    return account
