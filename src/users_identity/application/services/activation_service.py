"""Activation service for email confirmation links."""

import logging
from uuid import uuid4

from users_identity.application.services.error_boundary import internal_errors
from users_identity.domain.account import (
    AccountRepository,
    AccountView,
    ActivationLinkNotFoundError,
)

logger = logging.getLogger(__name__)


class ActivationService:
    """Mints activation links and confirms them."""

    ACTIVATION_PATH = "/api/v1/auth/activate"

    def __init__(
        self,
        account_repository: AccountRepository,
        api_base_url: str,
    ):
        self._account_repo = account_repository
        self._api_base_url = api_base_url.rstrip("/")

    @staticmethod
    def generate_activation_link() -> str:
        # Random, never derived from the email
        return str(uuid4())

    def build_activation_url(self, link: str) -> str:
        return f"{self._api_base_url}{self.ACTIVATION_PATH}/{link}"

    async def activate(self, link: str) -> None:
        with internal_errors("activate"):
            account = await self._account_repo.find_by_activation_link(link)
            if account is None:
                logger.info("Activation attempted with unknown link")
                raise ActivationLinkNotFoundError(link)

            if not account.activate():
                logger.debug("Account already activated: %s", account.id)
                return

            await self._account_repo.update(account)
            logger.info("Account activated: %s", account.id)

    async def get_account_by_activation_link(self, link: str) -> AccountView:
        with internal_errors("get_account_by_activation_link"):
            account = await self._account_repo.find_by_activation_link(link)
        if account is None:
            raise ActivationLinkNotFoundError(link)
        return AccountView.from_account(account)
