"""SQLAlchemy implementation of AccountRepository."""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from users_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
    EmailAlreadyExistsError,
)
from users_identity.domain.shared.time import ensure_tz_aware, utc_now
from users_identity.infrastructure.persistence.sqlalchemy.models import AccountModel

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_all(self) -> list[Account]:
        stmt = select(AccountModel).order_by(AccountModel.id)
        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    async def find_by_email(self, email: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.email == email)
        return await self._find_one(stmt)

    async def find_by_id(self, account_id: int) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        return await self._find_one(stmt)

    async def find_by_activation_link(self, link: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.activation_link == link)
        return await self._find_one(stmt)

    async def insert(self, account: Account) -> int:
        model = self._map_to_model(account)
        self._session.add(model)
        await self._flush_unique(account.email)
        logger.info("Created account: %s (email: %s)", model.id, model.email)
        return model.id

    async def update_token(self, account_id: int, token: str) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(session_token=token, updated_at=utc_now())
        )
        await self._session.execute(stmt)
        await self._session.flush()

    async def clear_token_by_token(self, token: str) -> bool:
        if not token:
            return False

        stmt = (
            update(AccountModel)
            .where(AccountModel.session_token == token)
            .values(session_token="", updated_at=utc_now())
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount > 0  # type: ignore

    async def update(self, account: Account) -> None:
        model = await self._find_model_by_id(account.id)
        if model is None:
            raise AccountNotFoundError(account.id)

        self._update_model(model, account)
        await self._flush_unique(account.email)
        logger.debug("Updated account: %s", account.id)

    async def delete(self, email: str) -> bool:
        stmt = select(AccountModel).where(AccountModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()
        logger.info("Deleted account: %s", model.id)
        return True

    async def _find_one(self, stmt) -> Account | None:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def _find_model_by_id(self, account_id: int | None) -> AccountModel | None:
        if account_id is None:
            return None
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _flush_unique(self, email: str) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyExistsError(email) from e
            raise

    def _map_to_domain(self, model: AccountModel) -> Account:
        return Account.reconstitute(
            id=model.id,
            full_name=model.full_name,
            email=model.email,
            password_hash=model.password_hash,
            session_token=model.session_token,
            is_activated=model.is_activated,
            activation_link=model.activation_link,
            role=model.role,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, account: Account) -> AccountModel:
        return AccountModel(
            full_name=account.full_name,
            email=account.email,
            password_hash=account.password_hash,
            session_token=account.session_token,
            is_activated=account.is_activated,
            activation_link=account.activation_link,
            role=account.role.value,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )

    def _update_model(self, model: AccountModel, account: Account) -> None:
        model.full_name = account.full_name
        model.email = account.email
        model.password_hash = account.password_hash
        model.session_token = account.session_token
        model.is_activated = account.is_activated
        model.role = account.role.value
        model.updated_at = account.updated_at
