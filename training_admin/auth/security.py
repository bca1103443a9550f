"""Security utilities for admin authentication.

Provides:
- Password hashing with Argon2id
- JWT access and refresh tokens (type-separated)
"""

from datetime import timedelta
from typing import Any
from uuid import uuid4

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError
from jose import JWTError, jwt

from training_admin.config.settings import Settings, get_settings
from training_admin.utils import utc_now


_password_hasher = PasswordHasher(
    time_cost=2,
    memory_cost=19456,  # KiB
    parallelism=1,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    >>> hash_password("secret").startswith("$argon2id$")
    True
    """
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> tuple[bool, str | None]:
    """Verify a password against its hash.

    Returns:
        Tuple of (is_valid, new_hash) where new_hash is set when the stored
        hash was made with outdated parameters.
    """
    try:
        _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, InvalidHashError):
        return False, None

    if _password_hasher.check_needs_rehash(password_hash):
        return True, hash_password(password)
    return True, None


def _encode(
    data: dict[str, Any],
    token_type: str,
    lifetime: timedelta,
    settings: Settings,
    extra: dict[str, Any] | None = None,
) -> str:
    issued_at = utc_now()
    to_encode = {
        **data,
        **(extra or {}),
        "exp": issued_at + lifetime,
        "iat": issued_at,
        "type": token_type,
    }
    return jwt.encode(
        to_encode, settings.auth_secret_key, algorithm=settings.auth_algorithm
    )


def create_access_token(
    data: dict[str, Any],
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a short-lived access token.

    Args:
        data: Claims, typically {"sub": account_id, "email": email}
        settings: Signing settings (default: global settings)
        expires_delta: Token lifetime (default from settings)
    """
    settings = settings or get_settings()
    lifetime = expires_delta or timedelta(
        minutes=settings.auth_access_token_expire_minutes
    )
    return _encode(data, "access", lifetime, settings)


def create_refresh_token(
    data: dict[str, Any],
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> tuple[str, str]:
    """Create a refresh token.

    Returns:
        Tuple of (token, jti); the jti identifies the token for revocation.
    """
    settings = settings or get_settings()
    jti = str(uuid4())
    lifetime = expires_delta or timedelta(days=settings.auth_refresh_token_expire_days)
    return _encode(data, "refresh", lifetime, settings, {"jti": jti}), jti


def _decode(token: str, expected_type: str, settings: Settings) -> dict[str, Any]:
    payload = jwt.decode(
        token, settings.auth_secret_key, algorithms=[settings.auth_algorithm]
    )
    if payload.get("type") != expected_type:
        msg = f"Invalid token type: expected '{expected_type}'"
        raise JWTError(msg)
    return payload


def decode_access_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Decode and validate an access token.

    Raises:
        JWTError: If token is invalid, expired, or not an access token
    """
    return _decode(token, "access", settings or get_settings())


def decode_refresh_token(
    token: str, settings: Settings | None = None
) -> dict[str, Any]:
    """Decode and validate a refresh token.

    Raises:
        JWTError: If token is invalid, expired, not a refresh token or has no jti
    """
    payload = _decode(token, "refresh", settings or get_settings())
    if "jti" not in payload:
        msg = "Refresh token missing jti claim"
        raise JWTError(msg)
    return payload
