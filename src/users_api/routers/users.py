"""Account management router."""

import logging

from fastapi import APIRouter, status

from users_api.dependencies import AdminToken, CurrentAccount, DBSession, Sessions
from users_api.schemas.common import MessageResponse
from users_api.schemas.users import (
    AccountResponse,
    DeleteAccountRequest,
    UpdateAccountRequest,
)
from users_identity.application.dtos import UpdateAccountData
from users_identity.domain.account import AccountView, AdminRequiredError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    summary="List all accounts",
    responses={
        200: {"description": "All accounts, ordered by id"},
        401: {"description": "Missing, invalid or revoked token"},
        403: {"description": "Admin access required"},
    },
)
async def list_users(
    _admin: AdminToken,  # Used for authorization check
    sessions: Sessions,
) -> list[AccountResponse]:
    views = await sessions.get_users()
    return [AccountResponse.from_view(view) for view in views]


@router.get("/me", summary="Get the current account")
async def get_me(account: CurrentAccount) -> AccountResponse:
    return AccountResponse.from_view(AccountView.from_account(account))


@router.put(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Update an account",
    responses={
        201: {"description": "Account updated"},
        400: {"description": "Invalid input"},
        403: {"description": "Only admins may update other accounts"},
        404: {"description": "Account not found"},
        409: {"description": "Email already registered"},
    },
)
async def update_user(
    request: UpdateAccountRequest,
    account: CurrentAccount,
    sessions: Sessions,
    session: DBSession,
) -> AccountResponse:
    target_id = request.id if request.id is not None else account.id
    if target_id != account.id and not account.is_admin:
        raise AdminRequiredError

    view = await sessions.update_user(
        UpdateAccountData(
            account_id=target_id,
            full_name=request.full_name,
            email=request.email,
            password=request.password,
        ),
    )
    await session.commit()
    return AccountResponse.from_view(view)


@router.delete(
    "",
    summary="Delete an account",
    responses={
        200: {"description": "Account deleted"},
        403: {"description": "Only admins may delete other accounts"},
        404: {"description": "Account not found"},
    },
)
async def delete_user(
    request: DeleteAccountRequest,
    account: CurrentAccount,
    sessions: Sessions,
    session: DBSession,
) -> MessageResponse:
    if request.email.strip() != account.email and not account.is_admin:
        raise AdminRequiredError

    await sessions.delete_user(request.email)
    await session.commit()
    logger.info("Account %s deleted by account %s", request.email, account.id)
    return MessageResponse(message="Account deleted")
