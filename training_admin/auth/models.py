"""Admin account and refresh session entities.

Both live in the credentials document, stored apart from the training state.
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from training_admin.utils import format_datetime, parse_datetime, utc_now


class AdminAccount:
    """Console administrator.

    Attributes:
        id: Account ID
        email: Login email, stored lower-cased
        password_hash: Argon2id hash
        created_at: Sign-up timestamp
    """

    def __init__(
        self,
        email: str,
        password_hash: str,
        id: str | None = None,
        created_at: datetime | None = None,
    ):
        self.id = id or str(uuid4())
        self.email = email.strip().lower()
        self.password_hash = password_hash
        self.created_at = parse_datetime(created_at) or utc_now()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AdminAccount":
        return cls(
            id=data["id"],
            email=data["email"],
            password_hash=data["password_hash"],
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "password_hash": self.password_hash,
            "created_at": format_datetime(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<AdminAccount {self.email}>"


class RefreshSession:
    """Issued refresh token, tracked by jti for rotation and revocation."""

    def __init__(
        self,
        jti: str,
        account_id: str,
        expires_at: datetime,
        revoked: bool = False,
        created_at: datetime | None = None,
    ):
        self.jti = jti
        self.account_id = account_id
        self.expires_at = parse_datetime(expires_at)
        self.revoked = revoked
        self.created_at = parse_datetime(created_at) or utc_now()

    def is_valid(self) -> bool:
        """Not revoked and not expired."""
        if self.revoked or self.expires_at is None:
            return False
        return self.expires_at >= utc_now()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RefreshSession":
        return cls(
            jti=data["jti"],
            account_id=data["account_id"],
            expires_at=data["expires_at"],
            revoked=bool(data.get("revoked", False)),
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "jti": self.jti,
            "account_id": self.account_id,
            "expires_at": format_datetime(self.expires_at),
            "revoked": self.revoked,
            "created_at": format_datetime(self.created_at),
        }
