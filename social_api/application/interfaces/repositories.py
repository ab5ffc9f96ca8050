"""
Repository interfaces (ports) for domain entities.

These interfaces define the contract for persistence operations
without specifying the implementation details.
"""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ...domain.entities.user import User


class UserRepository(ABC):
    """Account store used by the session core."""

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            id: User UUID

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    async def username_exists(self, username: str) -> bool:
        """Check if username is already registered."""
        pass

    @abstractmethod
    async def nickname_exists(self, nickname: str) -> bool:
        """Check if nickname is already in use."""
        pass

    @abstractmethod
    async def add(self, entity: User) -> User:
        """
        Add new user.

        Args:
            entity: User to add

        Returns:
            Persisted user
        """
        pass

    @abstractmethod
    async def update_refresh_token_hash(self, id: UUID, token_hash: Optional[str]) -> None:
        """
        Overwrite the stored refresh token fingerprint.

        Args:
            id: User UUID
            token_hash: New fingerprint, or None to end the session
        """
        pass
