"""
Session lifecycle: login, refresh-token rotation and logout.
"""
import asyncio
import logging
from uuid import UUID

from .refresh_token_store import RefreshTokenStore
from .results import AuthError, AuthResult
from ..interfaces.repositories import UserRepository
from ..interfaces.services import PasswordHasher, TokenPair, TokenService

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Orchestrates the per-user session state machine.

    A user is logged out while no refresh fingerprint is stored and active
    while one is. Login and refresh both move the user to a new active
    state, logout moves them back. One session per user: a second login
    replaces the first session's fingerprint.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
        refresh_token_store: RefreshTokenStore,
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._token_service = token_service
        self._refresh_token_store = refresh_token_store

    async def login(self, username: str, password: str) -> AuthResult:
        """
        Authenticate user and start a new session.

        Args:
            username: Login name
            password: Plain text password

        Returns:
            AuthResult with tokens and public profile on success
        """
        user = await self._user_repository.get_by_username(username)

        if user is None:
            # Unknown usernames cost one bcrypt verification, same as known ones
            await asyncio.to_thread(self._password_hasher.verify_decoy, password)
            logger.warning("Login failed: unknown username")
            return AuthResult(success=False, error=AuthError.INVALID_CREDENTIALS)

        password_ok = await asyncio.to_thread(
            self._password_hasher.verify, password, user.password_hash
        )
        if not password_ok:
            logger.warning(f"Login failed: bad password for user {user.id}")
            return AuthResult(success=False, error=AuthError.INVALID_CREDENTIALS)

        tokens = await self._start_session(user.id, user.username)

        logger.info(f"User {user.id} logged in")

        return AuthResult(
            success=True,
            profile=user.to_profile(),
            tokens=tokens,
        )

    async def refresh(self, user_id: UUID, presented_refresh_token: str) -> AuthResult:
        """
        Rotate the refresh token.

        The token's signature and expiry must already have been checked by
        RefreshGuard. Here it must also match the stored fingerprint, so a
        token that was rotated away (or never issued) cannot mint new
        tokens even while it is still unexpired.

        Args:
            user_id: Subject of the verified refresh token
            presented_refresh_token: The raw refresh token

        Returns:
            AuthResult with a brand-new token pair on success
        """
        user = await self._user_repository.get_by_id(user_id)

        if user is None or not user.has_active_session:
            logger.warning(f"Refresh rejected for user {user_id}: no active session")
            return AuthResult(success=False, error=AuthError.SESSION_NOT_FOUND)

        if not await self._refresh_token_store.matches_fingerprint(
            user.refresh_token_hash, presented_refresh_token
        ):
            logger.warning(f"Refresh rejected for user {user_id}: token does not match current session")
            return AuthResult(success=False, error=AuthError.TOKEN_REUSED)

        tokens = await self._start_session(user.id, user.username)

        logger.info(f"Rotated refresh token for user {user.id}")

        return AuthResult(success=True, tokens=tokens)

    async def logout(self, user_id: UUID) -> AuthResult:
        """
        End the user's session. Succeeds when already logged out.

        Args:
            user_id: User to log out
        """
        await self._refresh_token_store.clear(user_id)

        logger.info(f"User {user_id} logged out")

        return AuthResult(success=True)

    async def _start_session(self, user_id: UUID, username: str) -> TokenPair:
        tokens = self._token_service.create_token_pair(user_id, username)
        await self._refresh_token_store.set(user_id, tokens.refresh_token)
        return tokens

