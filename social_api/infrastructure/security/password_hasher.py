"""
Password hashing implementation using bcrypt.
"""
import secrets

import bcrypt

from ...application.interfaces.services import PasswordHasher
from ...domain.exceptions import ExternalServiceException


class BcryptPasswordHasher(PasswordHasher):
    """Bcrypt implementation of password hasher."""

    def __init__(self, rounds: int = 10):
        """
        Initialize hasher with work factor.

        Args:
            rounds: Number of bcrypt rounds (log2 of the iteration count)
        """
        self._rounds = rounds
        # Hashed at the configured cost; matches no stored password
        self._decoy_hash = self.hash(secrets.token_urlsafe(16))

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt."""
        password_bytes = password.encode('utf-8')
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(password_bytes, salt)
        except (ValueError, MemoryError) as e:
            raise ExternalServiceException(
                service='bcrypt',
                message='Hashing failed',
                original_error=type(e).__name__,
            ) from e
        return hashed.decode('utf-8')

    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against a hash."""
        try:
            password_bytes = password.encode('utf-8')
            hashed_bytes = hashed.encode('utf-8')
            return bcrypt.checkpw(password_bytes, hashed_bytes)
        except (ValueError, TypeError, AttributeError):
            return False

    def verify_decoy(self, password: str) -> bool:
        self.verify(password, self._decoy_hash)
        return False
