"""Authentication router for registration, activation, login and logout."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

from users_api.dependencies import Activation, DBSession, Sessions, SettingsDep
from users_api.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RegisterRequest,
    RestorePasswordRequest,
    TokenResponse,
)
from users_api.schemas.common import MessageResponse
from users_api.schemas.users import AccountResponse
from users_identity.application.dtos import RestorePasswordData

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={
        201: {"description": "Account registered, session token issued"},
        400: {"description": "Invalid name, email or password"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    sessions: Sessions,
    session: DBSession,
) -> TokenResponse:
    """
    Register a new account.

    An activation link is emailed to the address. The returned token is
    usable right away, before activation.
    """
    token = await sessions.register(
        full_name=request.full_name,
        email=request.email,
        password=request.password,
    )
    await session.commit()
    return TokenResponse(token=token)


@router.get(
    "/activate/{link}",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Activate an account",
    responses={
        303: {"description": "Activated, redirect to the client"},
        404: {"description": "Unknown activation link"},
    },
)
async def activate(
    link: str,
    activation: Activation,
    session: DBSession,
    settings: SettingsDep,
) -> RedirectResponse:
    await activation.activate(link)
    await session.commit()
    return RedirectResponse(
        url=settings.client_url,
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get(
    "/activation/{link}",
    summary="Look up the account behind an activation link",
    responses={
        200: {"description": "Account found"},
        404: {"description": "Unknown activation link"},
    },
)
async def get_account_by_activation_link(
    link: str,
    activation: Activation,
) -> AccountResponse:
    view = await activation.get_account_by_activation_link(link)
    return AccountResponse.from_view(view)


@router.post(
    "/login",
    summary="Log in with email and password",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid email or password"},
    },
)
async def login(
    request: LoginRequest,
    sessions: Sessions,
    session: DBSession,
) -> LoginResponse:
    """
    Authenticate with email and password.

    Any token issued earlier for the account stops working.
    """
    result = await sessions.login(email=request.email, password=request.password)
    await session.commit()
    return LoginResponse(
        token=result.token,
        user=AccountResponse.from_view(result.account),
    )


@router.post(
    "/logout",
    summary="End the current session",
    responses={
        200: {"description": "Logged out"},
        401: {"description": "Token invalid or already logged out"},
    },
)
async def logout(
    request: LogoutRequest,
    sessions: Sessions,
    session: DBSession,
) -> MessageResponse:
    await sessions.logout(request.token)
    await session.commit()
    return MessageResponse(message="Logged out")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Request a password reset email",
    responses={
        202: {"description": "Request accepted (sent only if the email exists)"},
    },
)
async def forgot_password(
    request: ForgotPasswordRequest,
    sessions: Sessions,
    session: DBSession,
) -> MessageResponse:
    await sessions.request_password_restore(request.email)
    await session.commit()
    return MessageResponse(
        message="If the email is registered, a reset link has been sent",
    )


@router.post(
    "/restore-password",
    status_code=status.HTTP_201_CREATED,
    summary="Set a new password with a reset token",
    responses={
        201: {"description": "Password changed, sessions revoked"},
        400: {"description": "Weak password"},
        401: {"description": "Invalid, used or expired reset token"},
    },
)
async def restore_password(
    request: RestorePasswordRequest,
    sessions: Sessions,
    session: DBSession,
) -> MessageResponse:
    await sessions.restore_password(
        RestorePasswordData(token=request.token, new_password=request.new_password),
    )
    await session.commit()
    return MessageResponse(message="Password has been reset")
