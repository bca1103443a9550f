"""Admin authentication service.

Accounts and refresh sessions are kept in the credentials document,
persisted through the same StateRepository as the training state.
"""

import asyncio
from datetime import timedelta

import structlog

from training_admin.config.settings import Settings
from training_admin.store import StateRepository
from training_admin.utils import utc_now

from .models import AdminAccount, RefreshSession
from .security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class AuthError(Exception):
    """Base authentication error."""

    def __init__(self, message: str, code: str = "auth_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class NoAccountError(AuthError):
    """No admin has signed up yet."""

    def __init__(self, message: str = "No admin account found. Please sign up first."):
        super().__init__(message, "no_account")


class InvalidCredentialsError(AuthError):
    """Unknown email or wrong password."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, "invalid_credentials")


class AccountExistsError(AuthError):
    """Email already registered."""

    def __init__(
        self,
        message: str = "An account with this email already exists. Please sign in.",
    ):
        super().__init__(message, "account_exists")


class SignupDisabledError(AuthError):
    """Sign-up turned off by configuration."""

    def __init__(self, message: str = "Sign-up is disabled"):
        super().__init__(message, "signup_disabled")


class InvalidTokenError(AuthError):
    """Refresh token invalid, expired or revoked."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, "invalid_token")


# ==============================================================================
# Auth Service
# ==============================================================================


class AuthService:
    """Sign-up, sign-in and refresh token rotation for admins."""

    def __init__(self, repository: StateRepository, settings: Settings):
        self.repository = repository
        self.settings = settings
        self.storage_key = settings.credentials_storage_key
        self.accounts: list[AdminAccount] = []
        self.sessions: list[RefreshSession] = []
        self._lock = asyncio.Lock()

    async def load(self) -> None:
        """Read the credentials document (absent means no accounts)."""
        document = await self.repository.load(self.storage_key) or {}
        self.accounts = [AdminAccount.from_dict(a) for a in document.get("accounts", [])]
        self.sessions = [
            RefreshSession.from_dict(s) for s in document.get("sessions", [])
        ]
        logger.info("credentials_loaded", accounts=len(self.accounts))

    async def _persist(self) -> None:
        # Drop expired and revoked sessions
        self.sessions = [s for s in self.sessions if s.is_valid()]
        await self.repository.save(
            self.storage_key,
            {
                "accounts": [a.to_dict() for a in self.accounts],
                "sessions": [s.to_dict() for s in self.sessions],
            },
        )

    # ==========================================================================
    # Accounts
    # ==========================================================================

    def get_account(self, account_id: str) -> AdminAccount | None:
        return next((a for a in self.accounts if a.id == account_id), None)

    def get_account_by_email(self, email: str) -> AdminAccount | None:
        email = email.strip().lower()
        return next((a for a in self.accounts if a.email == email), None)

    async def sign_up(self, email: str, password: str) -> AdminAccount:
        """Register an admin.

        Raises:
            SignupDisabledError: If sign-up is turned off
            AccountExistsError: If the email is taken (case-insensitive)
        """
        if not self.settings.auth_allow_signup:
            raise SignupDisabledError

        async with self._lock:
            if self.get_account_by_email(email):
                raise AccountExistsError
            account = AdminAccount(email=email, password_hash=hash_password(password))
            self.accounts.append(account)
            await self._persist()

        logger.info("admin_signed_up", account_id=account.id)
        return account

    async def sign_in(self, email: str, password: str) -> AdminAccount:
        """Check credentials.

        Raises:
            NoAccountError: If nobody has signed up yet
            InvalidCredentialsError: If email or password is wrong
        """
        if not self.accounts:
            raise NoAccountError

        account = self.get_account_by_email(email)
        if account is None:
            logger.warning("admin_login_failed", reason="unknown_email")
            raise InvalidCredentialsError

        is_valid, new_hash = verify_password(password, account.password_hash)
        if not is_valid:
            logger.warning("admin_login_failed", reason="wrong_password")
            raise InvalidCredentialsError

        if new_hash:
            async with self._lock:
                account.password_hash = new_hash
                await self._persist()
            logger.info("admin_password_rehashed", account_id=account.id)

        logger.info("admin_signed_in", account_id=account.id)
        return account

    # ==========================================================================
    # Tokens
    # ==========================================================================

    async def create_tokens(self, account: AdminAccount) -> tuple[str, str]:
        """Issue an access token and a tracked refresh token."""
        claims = {"sub": account.id, "email": account.email}
        access_token = create_access_token(claims, self.settings)
        refresh_token, jti = create_refresh_token(claims, self.settings)

        async with self._lock:
            self.sessions.append(
                RefreshSession(
                    jti=jti,
                    account_id=account.id,
                    expires_at=utc_now()
                    + timedelta(days=self.settings.auth_refresh_token_expire_days),
                )
            )
            await self._persist()

        return access_token, refresh_token

    async def refresh_tokens(
        self, refresh_token: str
    ) -> tuple[AdminAccount, str, str]:
        """Rotate a refresh token: revoke it and issue a new pair.

        Raises:
            InvalidTokenError: If the token is invalid, unknown or revoked
        """
        async with self._lock:
            session = self._valid_session(refresh_token)
            account = self.get_account(session.account_id)
            if account is None:
                raise InvalidTokenError
            session.revoked = True

        access_token, new_refresh_token = await self.create_tokens(account)
        logger.info("admin_token_refreshed", account_id=account.id)
        return account, access_token, new_refresh_token

    async def revoke_token(self, refresh_token: str) -> None:
        """Revoke a refresh token.

        Raises:
            InvalidTokenError: If the token is invalid, unknown or revoked
        """
        async with self._lock:
            session = self._valid_session(refresh_token)
            session.revoked = True
            await self._persist()
        logger.info("admin_signed_out", account_id=session.account_id)

    def _valid_session(self, refresh_token: str) -> RefreshSession:
        try:
            payload = decode_refresh_token(refresh_token, self.settings)
        except Exception as e:
            raise InvalidTokenError from e

        session = next((s for s in self.sessions if s.jti == payload["jti"]), None)
        if session is None or not session.is_valid():
            raise InvalidTokenError
        return session
