"""
Request-boundary token checks.

Guards only extract and verify; they never raise for authentication
failures. The HTTP layer decides what a failed GuardResult looks like.
"""
import logging
from typing import Optional

from .interfaces.repositories import UserRepository
from .interfaces.services import TokenClaims, TokenService
from .services.results import AuthError, GuardResult, RefreshPrincipal
from ..domain.exceptions import TokenExpiredError, TokenInvalidError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_PREFIX:
        return None

    token = token.strip()
    return token or None


class AccessGuard:
    """Verifies access tokens and resolves the account they belong to."""

    def __init__(self, token_service: TokenService):
        self._token_service = token_service

    async def authorize(
        self,
        authorization: Optional[str],
        user_repository: UserRepository,
    ) -> GuardResult:
        token = extract_bearer_token(authorization)
        if token is None:
            return GuardResult(success=False, error=AuthError.TOKEN_MISSING)

        try:
            claims = self._token_service.verify_access_token(token)
        except TokenExpiredError:
            return GuardResult(success=False, error=AuthError.TOKEN_EXPIRED)
        except TokenInvalidError:
            return GuardResult(success=False, error=AuthError.TOKEN_INVALID)

        user = await user_repository.get_by_id(claims.sub)
        if user is None:
            logger.warning(f"Access token presented for missing account {claims.sub}")
            return GuardResult(success=False, error=AuthError.ACCOUNT_MISSING)

        return GuardResult(success=True, user=user)


class RefreshGuard:
    """
    Verifies refresh tokens.

    The raw token is carried forward with the claims because the session
    manager compares it against the stored fingerprint.
    """

    def __init__(self, token_service: TokenService):
        self._token_service = token_service

    def authorize(self, authorization: Optional[str]) -> GuardResult:
        token = extract_bearer_token(authorization)
        if token is None:
            return GuardResult(success=False, error=AuthError.TOKEN_MISSING)

        try:
            claims: TokenClaims = self._token_service.verify_refresh_token(token)
        except TokenExpiredError:
            return GuardResult(success=False, error=AuthError.TOKEN_EXPIRED)
        except TokenInvalidError:
            return GuardResult(success=False, error=AuthError.TOKEN_INVALID)

        return GuardResult(
            success=True,
            refresh=RefreshPrincipal(
                user_id=claims.sub,
                username=claims.username,
                refresh_token=token,
            ),
        )
