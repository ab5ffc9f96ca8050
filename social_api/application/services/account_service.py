"""
Account registration and username availability.
"""
import asyncio
import logging
from typing import Optional

from .results import AuthError, AuthResult
from ..interfaces.repositories import UserRepository
from ..interfaces.services import PasswordHasher
from ...domain.entities.user import User

logger = logging.getLogger(__name__)


class AccountService:
    """Creates accounts and answers username availability checks."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher

    async def register(
        self,
        username: str,
        password: str,
        confirm_password: str,
        nickname: str,
        profile_image: Optional[str] = None,
    ) -> AuthResult:
        """
        Register a new user.

        Args:
            username: Unique login name
            password: Plain text password
            confirm_password: Must equal ``password``
            nickname: Unique display name
            profile_image: URL of an already uploaded avatar

        Returns:
            AuthResult with the public profile on success
        """
        if password != confirm_password:
            return AuthResult(success=False, error=AuthError.PASSWORD_MISMATCH)

        if await self._user_repository.username_exists(username):
            return AuthResult(success=False, error=AuthError.USERNAME_TAKEN)

        if await self._user_repository.nickname_exists(nickname):
            return AuthResult(success=False, error=AuthError.NICKNAME_TAKEN)

        password_hash = await asyncio.to_thread(self._password_hasher.hash, password)

        user = User(
            username=username,
            password_hash=password_hash,
            nickname=nickname,
            profile_image=profile_image,
        )
        saved_user = await self._user_repository.add(user)

        logger.info(f"Registered user {saved_user.id}")

        return AuthResult(success=True, profile=saved_user.to_profile())

    async def check_username(self, username: str) -> bool:
        """Return True if ``username`` is still available."""
        return not await self._user_repository.username_exists(username)
