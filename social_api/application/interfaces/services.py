"""
External service interfaces (ports).

These interfaces define contracts for external services
that the application depends on.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class TokenKind(str, Enum):
    """Kinds of bearer token. Each kind is signed with its own secret."""
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    """Claims recovered from a verified token. Never persisted."""
    sub: UUID  # Subject (user ID)
    username: str
    iat: datetime  # Issued at time
    exp: datetime  # Expiration time
    jti: str  # JWT ID (unique identifier)
    type: TokenKind


@dataclass
class TokenPair:
    """Access and refresh token pair."""
    access_token: str
    refresh_token: str
    access_token_expires_at: datetime
    refresh_token_expires_at: datetime
    token_type: str = "Bearer"


class PasswordHasher(ABC):
    """Interface for password hashing service."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plain text password."""
        pass

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against its hash."""
        pass

    @abstractmethod
    def verify_decoy(self, password: str) -> bool:
        """
        Spend one verification on a password that has no account.

        Always returns False. Takes as long as ``verify`` on a real hash.
        """
        pass


class TokenService(ABC):
    """Interface for JWT token service."""

    @abstractmethod
    def create_token_pair(self, user_id: UUID, username: str) -> TokenPair:
        """Create a fresh access and refresh token pair."""
        pass

    @abstractmethod
    def verify_access_token(self, token: str) -> TokenClaims:
        """Verify an access token, raising TokenExpiredError or TokenInvalidError."""
        pass

    @abstractmethod
    def verify_refresh_token(self, token: str) -> TokenClaims:
        """Verify a refresh token, raising TokenExpiredError or TokenInvalidError."""
        pass
