"""Authentication API endpoints.

Provides routes for:
- Admin sign-up and login
- Token refresh (rotation) and logout
- Current admin profile
"""

import contextlib

from fastapi import APIRouter, HTTPException, Response, status

from training_admin.config.settings import Settings

from .dependencies import (
    AuthServiceDep,
    CurrentAdmin,
    RefreshTokenCookie,
    SettingsDep,
    handle_auth_error,
)
from .schemas import AdminResponse, LoginRequest, SignUpRequest, TokenResponse
from .service import AuthError, InvalidTokenError


router = APIRouter(prefix="/v1/auth", tags=["auth"])


def _set_refresh_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=settings.auth_cookie_httponly,
        secure=settings.auth_cookie_secure,
        samesite=settings.auth_cookie_samesite,
        max_age=settings.auth_refresh_token_expire_days * 24 * 60 * 60,
        path=settings.auth_cookie_path,
    )


def _clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(key=settings.auth_cookie_name, path=settings.auth_cookie_path)


@router.post(
    "/signup",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create the admin account and sign in",
    responses={
        403: {"description": "Sign-up disabled"},
        409: {"description": "Email already registered"},
    },
)
async def signup(
    data: SignUpRequest,
    response: Response,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> TokenResponse:
    """Register an admin; the new admin is signed in right away."""
    try:
        account = await auth_service.sign_up(data.email, data.password)
        access_token, refresh_token = await auth_service.create_tokens(account)
    except AuthError as e:
        raise handle_auth_error(e) from e

    _set_refresh_cookie(response, refresh_token, settings)
    return TokenResponse(
        access_token=access_token,
        expires_in=settings.auth_access_token_expire_minutes * 60,
        admin=AdminResponse.from_entity(account),
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Admin login",
    responses={401: {"description": "No account or invalid credentials"}},
)
async def login(
    data: LoginRequest,
    response: Response,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> TokenResponse:
    """Authenticate and return tokens.

    Returns the access token in the body and sets the refresh token cookie.
    """
    try:
        account = await auth_service.sign_in(data.email, data.password)
        access_token, refresh_token = await auth_service.create_tokens(account)
    except AuthError as e:
        raise handle_auth_error(e) from e

    _set_refresh_cookie(response, refresh_token, settings)
    return TokenResponse(
        access_token=access_token,
        expires_in=settings.auth_access_token_expire_minutes * 60,
        admin=AdminResponse.from_entity(account),
    )


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token",
    responses={401: {"description": "Invalid or expired refresh token"}},
)
async def refresh(
    response: Response,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
    refresh_token: RefreshTokenCookie,
) -> TokenResponse:
    """Rotate the refresh token from the cookie and issue a new access token."""
    if not refresh_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token not provided",
        )

    try:
        account, access_token, new_refresh_token = await auth_service.refresh_tokens(
            refresh_token
        )
    except InvalidTokenError as e:
        _clear_refresh_cookie(response, settings)
        raise handle_auth_error(e) from e

    _set_refresh_cookie(response, new_refresh_token, settings)
    return TokenResponse(
        access_token=access_token,
        expires_in=settings.auth_access_token_expire_minutes * 60,
        admin=AdminResponse.from_entity(account),
    )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Admin logout",
)
async def logout(
    response: Response,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
    refresh_token: RefreshTokenCookie,
) -> None:
    """Revoke the refresh token (if any) and clear its cookie."""
    if refresh_token:
        with contextlib.suppress(InvalidTokenError):
            await auth_service.revoke_token(refresh_token)

    _clear_refresh_cookie(response, settings)


@router.get("/me", response_model=AdminResponse, summary="Get current admin")
async def get_me(admin: CurrentAdmin, auth_service: AuthServiceDep) -> AdminResponse:
    """Current admin account."""
    account = auth_service.get_account(admin.id)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Admin account not found",
        )
    return AdminResponse.from_entity(account)
