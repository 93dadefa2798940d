"""Session service for registration, login and the account lifecycle."""

from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import timedelta
from typing import TYPE_CHECKING

from users_auth import (
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    TokenPayload,
    WeakPasswordError,
)
from users_identity.application.dtos import (
    LoginResult,
    RestorePasswordData,
    UpdateAccountData,
)
from users_identity.application.services.error_boundary import internal_errors
from users_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRole,
    AccountView,
    Email,
    EmailAlreadyExistsError,
    InvalidAccountDataError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidSessionError,
    PasswordPolicyError,
    clean_full_name,
)
from users_identity.domain.shared.time import utc_now

if TYPE_CHECKING:
    from users_identity.application.ports import Notifier
    from users_identity.application.services.activation_service import (
        ActivationService,
    )
    from users_identity.domain.account import AccountRepository
    from users_identity.repositories import PasswordResetTokenRepository

logger = logging.getLogger(__name__)


class SessionService:
    """
    Application service for the account lifecycle.

    Orchestrates users_auth primitives (password hashing, JWT tokens) with
    the Account aggregate to provide:
    - Registration with an activation email
    - Login, logout and token authentication
    - Profile updates and deletion
    - Password restore through a single-use emailed token

    Each account holds at most one session token. A token is only honoured
    while it is the one stored on the account, so logging in again, logging
    out or restoring the password revokes whatever token was issued before.
    """

    RESET_TOKEN_EXPIRY_HOURS = 1

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        token_repository: PasswordResetTokenRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        activation_service: ActivationService,
        notifier: Notifier,
        frontend_base_url: str,
    ):
        self._account_repo = account_repository
        self._token_repo = token_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._activation_service = activation_service
        self._notifier = notifier
        self._frontend_base_url = frontend_base_url.rstrip("/")

    def _check_password(self, password: str) -> None:
        try:
            self._password_service.validate_strength(password)
        except WeakPasswordError as e:
            raise PasswordPolicyError(e.message) from e

    def _decode(self, token: str) -> TokenPayload:
        try:
            return self._jwt_service.validate(token)
        except InvalidTokenError as e:
            logger.warning("Rejected session token: %s", e.message)
            raise InvalidSessionError(reason=e.message) from e

    def _issue_token(self, account: Account) -> str:
        return self._jwt_service.issue(
            account_id=account.id,
            role=account.role.value,
            email=account.email,
        )

    @staticmethod
    def _hash_reset_token(raw_token: str) -> str:
        return hashlib.sha256(raw_token.encode()).hexdigest()

    async def register(self, full_name: str, email: str, password: str) -> str:
        full_name = clean_full_name(full_name)
        email_obj = Email(email)
        self._check_password(password)

        with internal_errors("register"):
            if await self._account_repo.find_by_email(email_obj.value) is not None:
                raise EmailAlreadyExistsError(email_obj.value)

            activation_link = self._activation_service.generate_activation_link()
            account = Account.create(
                full_name=full_name,
                email=email_obj,
                password_hash=self._password_service.hash(password),
                activation_link=activation_link,
            )
            account.assign_id(await self._account_repo.insert(account))
            logger.info("Account registered: %s (id: %s)", account.email, account.id)

            activation_url = self._activation_service.build_activation_url(
                activation_link,
            )
            try:
                self._notifier.send_activation_email(
                    to_email=account.email,
                    activation_link=activation_url,
                )
            except Exception as e:
                # Registration stands; the user can still log in
                logger.error("Failed to send activation email: %s", e)

            token = self._issue_token(account)
            await self._account_repo.update_token(account.id, token)
            account.start_session(token)

        return token

    async def login(self, email: str, password: str) -> LoginResult:
        with internal_errors("login"):
            account = await self._account_repo.find_by_email(email.strip())
            if account is None:
                # Same bcrypt cost as a wrong password
                self._password_service.verify(
                    password,
                    self._password_service.dummy_hash(),
                )
                logger.warning("Login attempt for unknown email")
                raise InvalidCredentialsError

            if not self._password_service.verify(password, account.password_hash):
                logger.warning("Login failed for account: %s", account.id)
                raise InvalidCredentialsError

            if self._password_service.needs_rehash(account.password_hash):
                account.change_password_hash(self._password_service.hash(password))
                await self._account_repo.update(account)
                logger.debug("Password rehashed for account: %s", account.id)

            token = self._issue_token(account)
            await self._account_repo.update_token(account.id, token)
            account.start_session(token)

        logger.info("Account logged in: %s", account.id)
        return LoginResult(token=token, account=AccountView.from_account(account))

    async def logout(self, token: str) -> None:
        payload = self._decode(token)

        with internal_errors("logout"):
            cleared = await self._account_repo.clear_token_by_token(token)
        if not cleared:
            logger.warning(
                "Logout with inactive token for account: %s",
                payload.account_id,
            )
            raise InvalidSessionError(reason="Token is not the current session")

        logger.info("Account logged out: %s", payload.account_id)

    async def authenticate(self, token: str) -> Account:
        payload = self._decode(token)

        with internal_errors("authenticate"):
            account = await self._account_repo.find_by_id(payload.account_id)
        if account is None or not account.holds_session(token):
            logger.warning("Revoked session token for account: %s", payload.account_id)
            raise InvalidSessionError(reason="Token is not the current session")
        return account

    async def update_user(self, data: UpdateAccountData) -> AccountView:
        if data.is_empty():
            msg = "No fields to update"
            raise InvalidAccountDataError(msg)

        full_name = None
        if data.full_name is not None:
            full_name = clean_full_name(data.full_name)
        email_obj = Email(data.email) if data.email is not None else None
        if data.password is not None:
            self._check_password(data.password)

        with internal_errors("update_user"):
            account = await self._account_repo.find_by_id(data.account_id)
            if account is None:
                raise AccountNotFoundError(data.account_id)

            if full_name is not None:
                account.rename(full_name)

            if email_obj is not None and email_obj != account.email_obj:
                holder = await self._account_repo.find_by_email(email_obj.value)
                if holder is not None and holder.id != account.id:
                    raise EmailAlreadyExistsError(email_obj.value)
                account.change_email(email_obj)

            if data.password is not None:
                account.change_password_hash(self._password_service.hash(data.password))

            await self._account_repo.update(account)

        logger.info("Account updated: %s", account.id)
        return AccountView.from_account(account)

    async def delete_user(self, email: str) -> None:
        with internal_errors("delete_user"):
            deleted = await self._account_repo.delete(email.strip())
        if not deleted:
            raise AccountNotFoundError(email)
        logger.info("Account deleted: %s", email)

    async def get_users(self) -> list[AccountView]:
        with internal_errors("get_users"):
            accounts = await self._account_repo.find_all()
        return [AccountView.from_account(account) for account in accounts]

    async def grant_role(self, email: str, role: AccountRole) -> AccountView:
        """Change an account's role.

        The current session is cleared, since its token still carries the
        old role claim.
        """
        with internal_errors("grant_role"):
            account = await self._account_repo.find_by_email(email.strip())
            if account is None:
                raise AccountNotFoundError(email)

            if role == AccountRole.ADMIN:
                account.promote_to_admin()
            else:
                account.demote_to_user()
            account.end_session()
            await self._account_repo.update(account)

        logger.info("Role of account %s set to %s", account.id, role.value)
        return AccountView.from_account(account)

    async def request_password_restore(self, email: str) -> None:
        with internal_errors("request_password_restore"):
            account = await self._account_repo.find_by_email(email.strip())
            if account is None:
                # Silent to prevent email enumeration
                logger.debug("Password restore requested for unknown email")
                return

            raw_token = secrets.token_urlsafe(32)
            expires_at = utc_now() + timedelta(hours=self.RESET_TOKEN_EXPIRY_HOURS)

            await self._token_repo.cleanup_expired()
            await self._token_repo.invalidate_all_for_account(account.id)
            await self._token_repo.create(
                account.id,
                self._hash_reset_token(raw_token),
                expires_at,
            )

        reset_link = f"{self._frontend_base_url}/reset-password?token={raw_token}"
        try:
            self._notifier.send_password_reset_email(
                to_email=account.email,
                reset_link=reset_link,
            )
            logger.info("Password reset email sent for account: %s", account.id)
        except Exception as e:
            # Don't raise - the token is stored and a new one can be requested
            logger.error("Failed to send password reset email: %s", e)

    async def restore_password(self, data: RestorePasswordData) -> None:
        if not data.token:
            raise InvalidResetTokenError
        self._check_password(data.new_password)

        with internal_errors("restore_password"):
            reset_token = await self._token_repo.find_valid_by_hash(
                self._hash_reset_token(data.token),
            )
            if reset_token is None:
                raise InvalidResetTokenError
            if reset_token.is_used() or reset_token.is_expired(utc_now()):
                raise InvalidResetTokenError

            account = await self._account_repo.find_by_id(reset_token.account_id)
            if account is None:
                raise AccountNotFoundError(reset_token.account_id)

            account.change_password_hash(
                self._password_service.hash(data.new_password),
            )
            account.end_session()
            await self._account_repo.update(account)
            await self._token_repo.mark_used(reset_token.id)

        logger.info("Password restored for account: %s", account.id)
