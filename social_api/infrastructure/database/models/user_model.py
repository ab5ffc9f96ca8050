"""
SQLAlchemy model for User entity.
"""
from sqlalchemy import Column, String, Text

from .base import BaseModel
from ....domain.entities.user import User


class UserModel(BaseModel):
    """SQLAlchemy model for users table."""

    __tablename__ = 'users'

    # Authentication
    username = Column(String(20), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    nickname = Column(String(20), unique=True, nullable=False)
    profile_image = Column(String(512), nullable=True)
    bio = Column(Text, nullable=True)

    # bcrypt fingerprint of the current refresh token; NULL when logged out
    refresh_token_hash = Column(String(255), nullable=True)

    def to_domain(self) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=self.id,
            username=self.username,
            password_hash=self.password_hash,
            nickname=self.nickname,
            profile_image=self.profile_image,
            bio=self.bio,
            refresh_token_hash=self.refresh_token_hash,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_domain(cls, user: User) -> 'UserModel':
        """Create ORM model from domain entity."""
        return cls(
            id=user.id,
            username=user.username,
            password_hash=user.password_hash,
            nickname=user.nickname,
            profile_image=user.profile_image,
            bio=user.bio,
            refresh_token_hash=user.refresh_token_hash,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
