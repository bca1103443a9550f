"""Pydantic schemas for admin authentication."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from .models import AdminAccount


class SignUpRequest(BaseModel):
    """Admin sign-up request."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class LoginRequest(BaseModel):
    """Admin login request."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., description="Password")


class AdminResponse(BaseModel):
    """Authenticated admin."""

    id: str
    email: str
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, account: AdminAccount) -> "AdminResponse":
        return cls(id=account.id, email=account.email, created_at=account.created_at)


class TokenResponse(BaseModel):
    """Access token; the refresh token travels in an httpOnly cookie."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token lifetime in seconds")
    admin: AdminResponse | None = None
