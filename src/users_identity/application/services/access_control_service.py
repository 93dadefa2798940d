"""Access control for protected operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from users_auth import InvalidTokenError, JWTService, TokenPayload
from users_identity.application.services.error_boundary import internal_errors
from users_identity.domain.account import (
    AccountRole,
    AdminRequiredError,
    InvalidSessionError,
)

if TYPE_CHECKING:
    from users_identity.domain.account import AccountRepository

logger = logging.getLogger(__name__)

# Higher rank implies every privilege of the lower ones
_ROLE_RANK = {
    AccountRole.USER: 0,
    AccountRole.ADMIN: 1,
}


class AccessControlService:
    """Decides whether a session token may perform a privileged operation.

    Without an account repository the check is stateless: signature,
    expiry and role claim only. With one, the token must also still be the
    account's stored session token, so logged-out or superseded tokens are
    rejected.
    """

    def __init__(
        self,
        jwt_service: JWTService,
        account_repository: AccountRepository | None = None,
    ):
        self._jwt_service = jwt_service
        self._account_repo = account_repository

    async def check_access(
        self,
        token: str,
        required_role: AccountRole = AccountRole.ADMIN,
    ) -> TokenPayload:
        """Validate a token and check its role.

        Parameters
        ----------
        token
            Session token presented by the caller
        required_role
            Minimum role needed for the operation

        Returns
        -------
        The decoded token payload

        Raises
        ------
        InvalidSessionError
            If the token is invalid, expired or no longer the current session
        AdminRequiredError
            If the token's role lacks the required privilege
        """
        try:
            payload = self._jwt_service.validate(token)
        except InvalidTokenError as e:
            logger.warning("Access denied, invalid token: %s", e.message)
            raise InvalidSessionError(reason=e.message) from e

        if self._account_repo is not None:
            with internal_errors("check_access"):
                account = await self._account_repo.find_by_id(payload.account_id)
            if account is None or not account.holds_session(token):
                logger.warning(
                    "Access denied, revoked token for account: %s",
                    payload.account_id,
                )
                raise InvalidSessionError(reason="Token is not the current session")

        self.check_role(payload, required_role)
        return payload

    @staticmethod
    def check_role(payload: TokenPayload, required_role: AccountRole) -> None:
        try:
            rank = _ROLE_RANK[AccountRole(payload.role)]
        except ValueError:
            rank = -1
        if rank < _ROLE_RANK[required_role]:
            logger.warning(
                "Access denied for account %s: role %s, requires %s",
                payload.account_id,
                payload.role,
                required_role.value,
            )
            raise AdminRequiredError(required_role.value)
