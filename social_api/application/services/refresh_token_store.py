"""
Server-side fingerprint of the refresh token each user may rotate next.
"""
import asyncio
import hashlib
import logging
from typing import Optional
from uuid import UUID

from ..interfaces.repositories import UserRepository
from ..interfaces.services import PasswordHasher

logger = logging.getLogger(__name__)


class RefreshTokenStore:
    """
    Stores a one-way fingerprint of the current refresh token per user.

    Only the hash is persisted, so a leaked users table cannot be used to
    mint sessions. Every ``set`` overwrites the previous fingerprint, which
    is what invalidates an already-rotated token.
    """

    def __init__(self, user_repository: UserRepository, hasher: PasswordHasher):
        self._user_repository = user_repository
        self._hasher = hasher

    async def set(self, user_id: UUID, raw_token: str) -> None:
        """Fingerprint ``raw_token`` and make it the only valid refresh token."""
        fingerprint = await asyncio.to_thread(self._hasher.hash, self._digest(raw_token))
        await self._user_repository.update_refresh_token_hash(user_id, fingerprint)

    async def matches(self, user_id: UUID, raw_token: str) -> bool:
        """
        Check ``raw_token`` against the stored fingerprint.

        Returns False when the user has no active session.
        """
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            return False

        return await self.matches_fingerprint(user.refresh_token_hash, raw_token)

    async def matches_fingerprint(self, fingerprint: Optional[str], raw_token: str) -> bool:
        """Check ``raw_token`` against a fingerprint the caller already loaded."""
        if not fingerprint:
            return False

        return await asyncio.to_thread(self._hasher.verify, self._digest(raw_token), fingerprint)

    async def clear(self, user_id: UUID) -> None:
        """Drop the fingerprint, ending the user's session."""
        await self._user_repository.update_refresh_token_hash(user_id, None)

    @staticmethod
    def _digest(raw_token: str) -> str:
        # bcrypt reads at most 72 bytes and JWTs for one user share a longer prefix
        return hashlib.sha256(raw_token.encode('utf-8')).hexdigest()
