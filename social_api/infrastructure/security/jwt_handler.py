"""
JWT token handling implementation.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import jwt

from ...application.interfaces.services import TokenClaims, TokenKind, TokenPair, TokenService
from ...config import AuthSettings
from ...domain.exceptions import TokenExpiredError, TokenInvalidError

REQUIRED_CLAIMS = ["sub", "username", "exp", "iat", "jti", "type"]


class JWTHandler(TokenService):
    """
    Signs and verifies HS256 access/refresh tokens.

    Access and refresh tokens are signed with different secrets, so a
    leaked access secret cannot mint refresh tokens and vice versa.
    """

    def __init__(self, settings: AuthSettings):
        """
        Initialize JWT handler.

        Args:
            settings: Token secrets, lifetimes, algorithm and issuer
        """
        self._settings = settings
        self._algorithm = settings.algorithm
        self._issuer = settings.issuer

    @property
    def access_token_ttl(self) -> timedelta:
        return self._settings.access_ttl

    @property
    def refresh_token_ttl(self) -> timedelta:
        return self._settings.refresh_ttl

    def issue(
        self,
        user_id: UUID,
        username: str,
        kind: TokenKind,
        secret: str,
        ttl: timedelta,
        now: Optional[datetime] = None,
    ) -> str:
        """Sign a token for the given subject."""
        issued_at = now or datetime.now(timezone.utc)

        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": issued_at,
            "exp": issued_at + ttl,
            "jti": self._generate_jti(),
            "type": kind.value,
        }

        if self._issuer:
            payload["iss"] = self._issuer

        return jwt.encode(payload, secret, algorithm=self._algorithm)

    def verify(self, token: str, secret: str, kind: TokenKind) -> TokenClaims:
        """
        Verify and decode a token.

        Raises:
            TokenExpiredError: Signature is valid but the token has expired
            TokenInvalidError: Bad signature, malformed token, wrong kind
                or a subject that is not a UUID
        """
        options = {"require": REQUIRED_CLAIMS}
        if self._issuer:
            options["require"] = REQUIRED_CLAIMS + ["iss"]

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options=options,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError() from e

        if payload["type"] != kind.value:
            raise TokenInvalidError("Unexpected token type")

        try:
            subject = UUID(payload["sub"])
        except (TypeError, ValueError, AttributeError) as e:
            raise TokenInvalidError("Invalid token subject") from e

        return TokenClaims(
            sub=subject,
            username=payload["username"],
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            jti=payload["jti"],
            type=kind,
        )

    def create_access_token(self, user_id: UUID, username: str) -> str:
        """Create a new access token."""
        return self.issue(
            user_id,
            username,
            TokenKind.ACCESS,
            self._settings.access_token_secret,
            self.access_token_ttl,
        )

    def create_refresh_token(self, user_id: UUID, username: str) -> str:
        """Create a new refresh token."""
        return self.issue(
            user_id,
            username,
            TokenKind.REFRESH,
            self._settings.refresh_token_secret,
            self.refresh_token_ttl,
        )

    def create_token_pair(self, user_id: UUID, username: str) -> TokenPair:
        """Create both access and refresh tokens."""
        now = datetime.now(timezone.utc)

        return TokenPair(
            access_token=self.issue(
                user_id, username, TokenKind.ACCESS,
                self._settings.access_token_secret, self.access_token_ttl, now,
            ),
            refresh_token=self.issue(
                user_id, username, TokenKind.REFRESH,
                self._settings.refresh_token_secret, self.refresh_token_ttl, now,
            ),
            access_token_expires_at=now + self.access_token_ttl,
            refresh_token_expires_at=now + self.refresh_token_ttl,
        )

    def verify_access_token(self, token: str) -> TokenClaims:
        return self.verify(token, self._settings.access_token_secret, TokenKind.ACCESS)

    def verify_refresh_token(self, token: str) -> TokenClaims:
        return self.verify(token, self._settings.refresh_token_secret, TokenKind.REFRESH)

    def _generate_jti(self) -> str:
        """Generate unique JWT ID."""
        return str(uuid.uuid4())
