"""Admin authentication.

Provides:
- Argon2id password hashing
- JWT access tokens and rotating refresh tokens
- CurrentAdmin dependency guarding data endpoints
"""

from .models import AdminAccount, RefreshSession


__all__ = ["AdminAccount", "RefreshSession"]
