"""Unit tests for SessionService."""

import hashlib
from datetime import timedelta
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from users_auth import JWTService, PasswordHashingService, WeakPasswordError
from users_identity import (
    Account,
    AccountNotFoundError,
    AccountRole,
    EmailAlreadyExistsError,
    ErrorKind,
    InternalError,
    InvalidAccountDataError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidResetTokenError,
    InvalidSessionError,
    Notifier,
    PasswordPolicyError,
    RestorePasswordData,
    SessionService,
    UpdateAccountData,
)
from users_identity.application.services import ActivationService
from users_identity.domain.shared.time import utc_now
from users_identity.repositories import PasswordResetTokenData

JWT_SECRET = "unit-test-secret"
FRONTEND_URL = "https://app.example.com"
ACTIVATION_URL = "https://api.example.com/api/v1/auth/activate/link-123"
TEST_PASSWORD = "correct-horse-battery"


def _stored_account(
    account_id: int = 1,
    email: str = "test@example.com",
    session_token: str = "",
    role: AccountRole = AccountRole.USER,
) -> Account:
    account = Account.create(
        full_name="Test User",
        email=email,
        password_hash="stored-hash",
        activation_link=f"link-{account_id}",
        role=role,
    )
    account.assign_id(account_id)
    if session_token:
        account.start_session(session_token)
    return account


class _SessionServiceTestBase:
    def setup_method(self):
        """Set up test fixtures."""
        self.account_repo = AsyncMock()
        self.token_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash.return_value = "new-hash"
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = False
        self.jwt_service = JWTService(secret_key=JWT_SECRET)
        self.activation_service = Mock(spec=ActivationService)
        self.activation_service.generate_activation_link.return_value = "link-123"
        self.activation_service.build_activation_url.return_value = ACTIVATION_URL
        self.notifier = Mock(spec=Notifier)

        self.service = SessionService(
            account_repository=self.account_repo,
            token_repository=self.token_repo,
            password_service=self.password_service,
            jwt_service=self.jwt_service,
            activation_service=self.activation_service,
            notifier=self.notifier,
            frontend_base_url=FRONTEND_URL,
        )


class TestRegister(_SessionServiceTestBase):
    """Tests for register."""

    @pytest.mark.asyncio
    async def test_register_success(self):
        self.account_repo.find_by_email.return_value = None
        self.account_repo.insert.return_value = 1

        token = await self.service.register("Alice", "a@x.com", TEST_PASSWORD)

        payload = self.jwt_service.validate(token)
        assert payload.account_id == 1
        assert payload.role == "user"
        assert payload.email == "a@x.com"

        inserted = self.account_repo.insert.call_args[0][0]
        assert inserted.full_name == "Alice"
        assert inserted.password_hash == "new-hash"
        assert inserted.is_activated is False
        assert inserted.activation_link == "link-123"
        assert inserted.role == AccountRole.USER

        self.account_repo.update_token.assert_called_once_with(1, token)
        self.notifier.send_activation_email.assert_called_once_with(
            to_email="a@x.com",
            activation_link=ACTIVATION_URL,
        )

    @pytest.mark.asyncio
    async def test_register_duplicate_email_conflicts(self):
        self.account_repo.find_by_email.return_value = _stored_account(email="a@x.com")

        with pytest.raises(EmailAlreadyExistsError) as exc_info:
            await self.service.register("Alice", "a@x.com", TEST_PASSWORD)

        assert exc_info.value.kind == ErrorKind.CONFLICT
        self.account_repo.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_insert_race_conflicts(self):
        """A uniqueness violation from the store still surfaces as a conflict."""
        self.account_repo.find_by_email.return_value = None
        self.account_repo.insert.side_effect = EmailAlreadyExistsError("a@x.com")

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.register("Alice", "a@x.com", TEST_PASSWORD)

        self.account_repo.update_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_weak_password_is_validation_error(self):
        self.password_service.validate_strength.side_effect = WeakPasswordError(
            "Password cannot be empty",
        )

        with pytest.raises(PasswordPolicyError) as exc_info:
            await self.service.register("Alice", "a@x.com", "")

        assert exc_info.value.kind == ErrorKind.VALIDATION
        self.account_repo.find_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_empty_name_rejected(self):
        with pytest.raises(InvalidAccountDataError):
            await self.service.register("   ", "a@x.com", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_register_malformed_email_rejected(self):
        with pytest.raises(InvalidEmailError):
            await self.service.register("Alice", "not-an-email", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_register_survives_notifier_failure(self):
        self.account_repo.find_by_email.return_value = None
        self.account_repo.insert.return_value = 1
        self.notifier.send_activation_email.side_effect = OSError("SMTP down")

        token = await self.service.register("Alice", "a@x.com", TEST_PASSWORD)

        assert token
        self.account_repo.update_token.assert_called_once()

    @pytest.mark.asyncio
    async def test_register_store_failure_is_internal(self):
        self.account_repo.find_by_email.return_value = None
        self.account_repo.insert.side_effect = RuntimeError("connection lost")

        with pytest.raises(InternalError) as exc_info:
            await self.service.register("Alice", "a@x.com", TEST_PASSWORD)

        assert exc_info.value.kind == ErrorKind.INTERNAL
        assert "connection lost" not in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestLogin(_SessionServiceTestBase):
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_login_success(self):
        account = _stored_account(account_id=5, session_token="old-token")
        account.activate()
        self.account_repo.find_by_email.return_value = account

        result = await self.service.login("test@example.com", TEST_PASSWORD)

        assert result.token != "old-token"
        assert self.jwt_service.validate(result.token).account_id == 5
        assert result.account.id == 5
        assert result.account.is_activated is True
        self.account_repo.update_token.assert_called_once_with(5, result.token)

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_identical(self):
        self.account_repo.find_by_email.return_value = None
        with pytest.raises(InvalidCredentialsError) as unknown:
            await self.service.login("nobody@example.com", TEST_PASSWORD)

        self.account_repo.find_by_email.return_value = _stored_account()
        self.password_service.verify.return_value = False
        with pytest.raises(InvalidCredentialsError) as wrong:
            await self.service.login("test@example.com", "wrong-password")

        assert unknown.value.as_failure() == wrong.value.as_failure()
        assert unknown.value.message == "Invalid email or password"
        assert unknown.value.kind == ErrorKind.UNAUTHORIZED
        self.account_repo.update_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_email_still_runs_password_check(self):
        self.account_repo.find_by_email.return_value = None
        self.password_service.dummy_hash.return_value = "dummy-hash"

        with pytest.raises(InvalidCredentialsError):
            await self.service.login("nobody@example.com", TEST_PASSWORD)

        self.password_service.verify.assert_called_once_with(
            TEST_PASSWORD,
            "dummy-hash",
        )

    @pytest.mark.asyncio
    async def test_login_rehashes_outdated_hash(self):
        account = _stored_account()
        self.account_repo.find_by_email.return_value = account
        self.password_service.needs_rehash.return_value = True

        await self.service.login("test@example.com", TEST_PASSWORD)

        self.password_service.hash.assert_called_once_with(TEST_PASSWORD)
        updated = self.account_repo.update.call_args[0][0]
        assert updated.password_hash == "new-hash"


class TestLogout(_SessionServiceTestBase):
    """Tests for logout."""

    @pytest.mark.asyncio
    async def test_logout_clears_token(self):
        token = self.jwt_service.issue(1, "user", "test@example.com")
        self.account_repo.clear_token_by_token.return_value = True

        await self.service.logout(token)

        self.account_repo.clear_token_by_token.assert_called_once_with(token)

    @pytest.mark.asyncio
    async def test_second_logout_is_unauthorized(self):
        token = self.jwt_service.issue(1, "user", "test@example.com")
        self.account_repo.clear_token_by_token.return_value = False

        with pytest.raises(InvalidSessionError) as exc_info:
            await self.service.logout(token)

        assert exc_info.value.kind == ErrorKind.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_logout_with_invalid_token(self):
        with pytest.raises(InvalidSessionError):
            await self.service.logout("garbage")

        self.account_repo.clear_token_by_token.assert_not_called()


class TestAuthenticate(_SessionServiceTestBase):
    """Tests for authenticate."""

    @pytest.mark.asyncio
    async def test_current_token_authenticates(self):
        token = self.jwt_service.issue(1, "user", "test@example.com")
        account = _stored_account(session_token=token)
        self.account_repo.find_by_id.return_value = account

        assert await self.service.authenticate(token) is account

    @pytest.mark.asyncio
    async def test_activated_account_authenticates(self, test_account):
        token = self.jwt_service.issue(1, "user", "test@example.com")
        test_account.start_session(token)
        self.account_repo.find_by_id.return_value = test_account

        account = await self.service.authenticate(token)

        assert account.is_activated is True
        self.account_repo.find_by_id.assert_called_once_with(1)

    @pytest.mark.asyncio
    async def test_superseded_token_rejected(self):
        token = self.jwt_service.issue(1, "user", "test@example.com")
        self.account_repo.find_by_id.return_value = _stored_account(
            session_token="newer-token",
        )

        with pytest.raises(InvalidSessionError):
            await self.service.authenticate(token)

    @pytest.mark.asyncio
    async def test_deleted_account_rejected(self):
        token = self.jwt_service.issue(1, "user", "test@example.com")
        self.account_repo.find_by_id.return_value = None

        with pytest.raises(InvalidSessionError):
            await self.service.authenticate(token)

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self):
        token = self.jwt_service.issue(
            1,
            "user",
            "test@example.com",
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(InvalidSessionError):
            await self.service.authenticate(token)

        self.account_repo.find_by_id.assert_not_called()


class TestUpdateUser(_SessionServiceTestBase):
    """Tests for update_user."""

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self):
        with pytest.raises(InvalidAccountDataError):
            await self.service.update_user(UpdateAccountData(account_id=1))

    @pytest.mark.asyncio
    async def test_missing_account(self):
        self.account_repo.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.update_user(
                UpdateAccountData(account_id=9, full_name="New Name"),
            )

    @pytest.mark.asyncio
    async def test_rename_and_change_email(self):
        self.account_repo.find_by_id.return_value = _stored_account()
        self.account_repo.find_by_email.return_value = None

        view = await self.service.update_user(
            UpdateAccountData(account_id=1, full_name="New Name", email="new@x.com"),
        )

        assert view.full_name == "New Name"
        assert view.email == "new@x.com"
        self.account_repo.update.assert_called_once()

    @pytest.mark.asyncio
    async def test_email_taken_by_other_account_conflicts(self):
        self.account_repo.find_by_id.return_value = _stored_account()
        self.account_repo.find_by_email.return_value = _stored_account(
            account_id=2,
            email="taken@x.com",
        )

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.update_user(
                UpdateAccountData(account_id=1, email="taken@x.com"),
            )

        self.account_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_password_change_rehashes(self):
        self.account_repo.find_by_id.return_value = _stored_account()

        await self.service.update_user(
            UpdateAccountData(account_id=1, password="another-strong-one"),
        )

        self.password_service.validate_strength.assert_called_once_with(
            "another-strong-one",
        )
        updated = self.account_repo.update.call_args[0][0]
        assert updated.password_hash == "new-hash"

    @pytest.mark.asyncio
    async def test_role_and_activation_are_untouched(self):
        account = _stored_account()
        self.account_repo.find_by_id.return_value = account

        view = await self.service.update_user(
            UpdateAccountData(account_id=1, full_name="Renamed"),
        )

        assert view.role == AccountRole.USER
        assert view.is_activated is False


class TestDeleteAndList(_SessionServiceTestBase):
    @pytest.mark.asyncio
    async def test_delete_existing(self):
        self.account_repo.delete.return_value = True

        await self.service.delete_user("test@example.com")

        self.account_repo.delete.assert_called_once_with("test@example.com")

    @pytest.mark.asyncio
    async def test_delete_missing(self):
        self.account_repo.delete.return_value = False

        with pytest.raises(AccountNotFoundError) as exc_info:
            await self.service.delete_user("nobody@example.com")

        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_get_users_projects_views(self):
        self.account_repo.find_all.return_value = [
            _stored_account(account_id=1, email="a@x.com", session_token="secret"),
            _stored_account(account_id=2, email="b@x.com"),
        ]

        views = await self.service.get_users()

        assert [view.id for view in views] == [1, 2]
        assert [view.email for view in views] == ["a@x.com", "b@x.com"]

    @pytest.mark.asyncio
    async def test_grant_role_ends_session(self):
        account = _stored_account(session_token="live-token")
        self.account_repo.find_by_email.return_value = account

        view = await self.service.grant_role("test@example.com", AccountRole.ADMIN)

        assert view.role == AccountRole.ADMIN
        assert account.session_token == ""
        self.account_repo.update.assert_called_once_with(account)

    @pytest.mark.asyncio
    async def test_grant_role_demotes_admin(self, admin_account):
        self.account_repo.find_by_email.return_value = admin_account

        view = await self.service.grant_role("admin@example.com", AccountRole.USER)

        assert view.role == AccountRole.USER
        assert admin_account.is_admin is False

    @pytest.mark.asyncio
    async def test_grant_role_unknown_email(self):
        self.account_repo.find_by_email.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.grant_role("nobody@example.com", AccountRole.ADMIN)


class TestRequestPasswordRestore(_SessionServiceTestBase):
    """Tests for request_password_restore."""

    @pytest.mark.asyncio
    async def test_request_success(self):
        account = _stored_account(account_id=3)
        self.account_repo.find_by_email.return_value = account

        await self.service.request_password_restore("test@example.com")

        self.token_repo.invalidate_all_for_account.assert_called_once_with(3)
        self.token_repo.create.assert_called_once()
        account_id, token_hash, expires_at = self.token_repo.create.call_args[0]
        assert account_id == 3
        assert expires_at > utc_now()

        reset_link = self.notifier.send_password_reset_email.call_args.kwargs[
            "reset_link"
        ]
        assert reset_link.startswith(f"{FRONTEND_URL}/reset-password?token=")
        raw_token = reset_link.split("token=", 1)[1]
        assert hashlib.sha256(raw_token.encode()).hexdigest() == token_hash

    @pytest.mark.asyncio
    async def test_unknown_email_is_silent(self):
        self.account_repo.find_by_email.return_value = None

        await self.service.request_password_restore("unknown@example.com")

        self.token_repo.create.assert_not_called()
        self.notifier.send_password_reset_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_failure_is_not_raised(self):
        self.account_repo.find_by_email.return_value = _stored_account()
        self.notifier.send_password_reset_email.side_effect = OSError("SMTP down")

        await self.service.request_password_restore("test@example.com")

        self.token_repo.create.assert_called_once()


class TestRestorePassword(_SessionServiceTestBase):
    """Tests for restore_password."""

    def _token_data(self, **overrides) -> PasswordResetTokenData:
        data = {
            "id": uuid4(),
            "account_id": 1,
            "token_hash": "hash",
            "expires_at": utc_now() + timedelta(hours=1),
            "used_at": None,
            "created_at": utc_now(),
        }
        data.update(overrides)
        return PasswordResetTokenData(**data)

    @pytest.mark.asyncio
    async def test_restore_success_revokes_session(self):
        token_data = self._token_data()
        account = _stored_account(session_token="live-token")
        self.token_repo.find_valid_by_hash.return_value = token_data
        self.account_repo.find_by_id.return_value = account

        await self.service.restore_password(
            RestorePasswordData(token="raw-token", new_password="brand-new-password"),
        )

        expected_hash = hashlib.sha256(b"raw-token").hexdigest()
        self.token_repo.find_valid_by_hash.assert_called_once_with(expected_hash)
        assert account.password_hash == "new-hash"
        assert account.session_token == ""
        self.account_repo.update.assert_called_once_with(account)
        self.token_repo.mark_used.assert_called_once_with(token_data.id)

    @pytest.mark.asyncio
    async def test_unknown_token_unauthorized(self):
        self.token_repo.find_valid_by_hash.return_value = None

        with pytest.raises(InvalidResetTokenError) as exc_info:
            await self.service.restore_password(
                RestorePasswordData(token="bad", new_password="brand-new-password"),
            )

        assert exc_info.value.kind == ErrorKind.UNAUTHORIZED
        self.account_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_used_token_unauthorized(self):
        self.token_repo.find_valid_by_hash.return_value = self._token_data(
            used_at=utc_now(),
        )

        with pytest.raises(InvalidResetTokenError):
            await self.service.restore_password(
                RestorePasswordData(token="raw", new_password="brand-new-password"),
            )

    @pytest.mark.asyncio
    async def test_expired_token_unauthorized(self):
        self.token_repo.find_valid_by_hash.return_value = self._token_data(
            expires_at=utc_now() - timedelta(minutes=1),
        )

        with pytest.raises(InvalidResetTokenError):
            await self.service.restore_password(
                RestorePasswordData(token="raw", new_password="brand-new-password"),
            )

    @pytest.mark.asyncio
    async def test_weak_password_keeps_token_unused(self):
        self.password_service.validate_strength.side_effect = WeakPasswordError(
            "too short",
        )

        with pytest.raises(PasswordPolicyError):
            await self.service.restore_password(
                RestorePasswordData(token="raw", new_password="short"),
            )

        self.token_repo.find_valid_by_hash.assert_not_called()
        self.token_repo.mark_used.assert_not_called()

    @pytest.mark.asyncio
    async def test_account_gone(self):
        self.token_repo.find_valid_by_hash.return_value = self._token_data()
        self.account_repo.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.restore_password(
                RestorePasswordData(token="raw", new_password="brand-new-password"),
            )
