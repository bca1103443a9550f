"""FastAPI dependencies for authentication.

Provides dependency injection for:
- Auth service
- Current admin extraction from the access token
- Refresh token cookie
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError

from training_admin.config.settings import Settings
from training_admin.core.context import set_admin_id

from .schemas import AdminResponse
from .security import decode_access_token
from .service import AuthError, AuthService


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


async def get_auth_service(request: Request) -> AuthService:
    """Get auth service from app state."""
    auth_service = getattr(request.app.state, "auth_service", None)
    if auth_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service not available",
        )
    return auth_service


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_token_from_header(request: Request) -> str | None:
    """Extract Bearer token from Authorization header."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    expected_parts = 2
    parts = auth_header.split()
    if len(parts) != expected_parts or parts[0].lower() != "bearer":
        return None

    return parts[1]


def get_refresh_token_from_cookie(request: Request, settings: SettingsDep) -> str | None:
    """Extract refresh token from its httpOnly cookie."""
    return request.cookies.get(settings.auth_cookie_name)


RefreshTokenCookie = Annotated[str | None, Depends(get_refresh_token_from_cookie)]


async def get_current_admin(
    token: Annotated[str | None, Depends(get_token_from_header)],
    settings: SettingsDep,
) -> AdminResponse:
    """Get the authenticated admin from the access token.

    Raises:
        HTTPException(401): If token is missing, invalid, or expired
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token not provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token, settings)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    admin_id = payload["sub"]
    set_admin_id(admin_id)

    return AdminResponse(id=admin_id, email=payload["email"])


CurrentAdmin = Annotated[AdminResponse, Depends(get_current_admin)]


def handle_auth_error(error: AuthError) -> HTTPException:
    """Convert auth errors to HTTP exceptions."""
    status_map = {
        "no_account": status.HTTP_401_UNAUTHORIZED,
        "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
        "invalid_token": status.HTTP_401_UNAUTHORIZED,
        "account_exists": status.HTTP_409_CONFLICT,
        "signup_disabled": status.HTTP_403_FORBIDDEN,
    }

    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )
