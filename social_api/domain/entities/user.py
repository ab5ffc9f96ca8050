"""
User domain entity and its public profile.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from .base import Entity
from ..exceptions import ValidationException


@dataclass(frozen=True)
class UserProfile:
    """Public view of a user (value object). Carries no credential material."""
    id: UUID
    username: str
    nickname: str
    profile_image: Optional[str]
    bio: Optional[str]
    created_at: datetime


@dataclass(kw_only=True, eq=False)
class User(Entity):
    """
    User account.

    Holds the login credential and, while a session is active, the bcrypt
    fingerprint of the single refresh token currently allowed to rotate.
    """
    username: str
    password_hash: str
    nickname: str
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    refresh_token_hash: Optional[str] = None

    USERNAME_MAX_LENGTH = 20
    NICKNAME_MAX_LENGTH = 20

    def __post_init__(self) -> None:
        """Validate user data on construction."""
        self._validate()

    def _validate(self) -> None:
        errors = {}

        if not self.username or not self.username.strip():
            errors['username'] = ['Username is required']
        elif len(self.username) > self.USERNAME_MAX_LENGTH:
            errors['username'] = [f'Username cannot exceed {self.USERNAME_MAX_LENGTH} characters']

        if not self.nickname or not self.nickname.strip():
            errors['nickname'] = ['Nickname is required']
        elif len(self.nickname) > self.NICKNAME_MAX_LENGTH:
            errors['nickname'] = [f'Nickname cannot exceed {self.NICKNAME_MAX_LENGTH} characters']

        if not self.password_hash:
            errors['password_hash'] = ['Password hash is required']

        if errors:
            raise ValidationException(
                message="Invalid user data",
                errors=errors
            )

    @property
    def has_active_session(self) -> bool:
        """Check if a refresh token fingerprint is stored."""
        return bool(self.refresh_token_hash)

    def to_profile(self) -> UserProfile:
        """Project the user onto its public profile."""
        return UserProfile(
            id=self.id,
            username=self.username,
            nickname=self.nickname,
            profile_image=self.profile_image,
            bio=self.bio,
            created_at=self.created_at,
        )
