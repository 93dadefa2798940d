"""SQLAlchemy implementation of PasswordResetTokenRepository."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from users_identity.domain.shared.time import ensure_tz_aware, utc_now
from users_identity.infrastructure.persistence.sqlalchemy.models import (
    PasswordResetTokenModel,
)
from users_identity.repositories import (
    PasswordResetTokenData,
    PasswordResetTokenRepository,
)


class PasswordResetTokenRepositorySQLAlchemy(PasswordResetTokenRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(
        self,
        account_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> UUID:
        token_id = uuid4()
        model = PasswordResetTokenModel(
            id=str(token_id),
            account_id=account_id,
            token_hash=token_hash,
            expires_at=expires_at,
        )
        self._session.add(model)
        await self._session.flush()
        return token_id

    async def find_valid_by_hash(
        self,
        token_hash: str,
    ) -> PasswordResetTokenData | None:
        now = utc_now()
        stmt = select(PasswordResetTokenModel).where(
            PasswordResetTokenModel.token_hash == token_hash,
            PasswordResetTokenModel.used_at.is_(None),
            PasswordResetTokenModel.expires_at > now,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return PasswordResetTokenData(
            id=UUID(str(model.id)),
            account_id=model.account_id,
            token_hash=model.token_hash,
            expires_at=ensure_tz_aware(model.expires_at),
            used_at=ensure_tz_aware(model.used_at) if model.used_at else None,
            created_at=ensure_tz_aware(model.created_at),
        )

    async def mark_used(self, token_id: UUID) -> None:
        stmt = (
            update(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.id == str(token_id))
            .values(used_at=utc_now())
        )
        await self._session.execute(stmt)
        await self._session.flush()

    async def invalidate_all_for_account(self, account_id: int) -> None:
        stmt = (
            update(PasswordResetTokenModel)
            .where(
                PasswordResetTokenModel.account_id == account_id,
                PasswordResetTokenModel.used_at.is_(None),
            )
            .values(used_at=utc_now())
        )
        await self._session.execute(stmt)
        await self._session.flush()

    async def cleanup_expired(self) -> int:
        stmt = (
            delete(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.expires_at < utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore
