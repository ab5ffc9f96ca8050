"""
Outcome types returned by the auth services and guards.

Callers inspect ``success`` and either use the payload or the ``error``
kind. Only the HTTP layer turns an error kind into a status code.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID

from ..interfaces.services import TokenPair
from ...domain.entities.user import User, UserProfile


class AuthError(str, Enum):
    """Authentication failure kinds."""
    INVALID_CREDENTIALS = "invalid_credentials"
    TOKEN_MISSING = "token_missing"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    SESSION_NOT_FOUND = "session_not_found"
    TOKEN_REUSED = "token_reused"
    ACCOUNT_MISSING = "account_missing"
    USERNAME_TAKEN = "username_taken"
    NICKNAME_TAKEN = "nickname_taken"
    PASSWORD_MISMATCH = "password_mismatch"


@dataclass
class AuthResult:
    """Result of login, refresh, logout and signup operations."""
    success: bool
    profile: Optional[UserProfile] = None
    tokens: Optional[TokenPair] = None
    error: Optional[AuthError] = None


@dataclass(frozen=True)
class RefreshPrincipal:
    """Identity resolved from a verified refresh token, plus the raw token."""
    user_id: UUID
    username: str
    refresh_token: str


@dataclass
class GuardResult:
    """Result of a guard check. AccessGuard fills ``user``, RefreshGuard fills ``refresh``."""
    success: bool
    user: Optional[User] = None
    refresh: Optional[RefreshPrincipal] = None
    error: Optional[AuthError] = None
