"""
SQLAlchemy implementation of UserRepository.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ....application.interfaces.repositories import UserRepository
from ....domain.entities.user import User
from ....domain.exceptions import DuplicateEntityException
from ..models.user_model import UserModel


class SQLAlchemyUserRepository(UserRepository):
    """SQLAlchemy implementation of user repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, id: UUID) -> Optional[User]:
        """Get user by ID."""
        result = await self._session.execute(
            select(UserModel).where(UserModel.id == id)
        )
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        result = await self._session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def username_exists(self, username: str) -> bool:
        """Check if username is already registered."""
        result = await self._session.execute(
            select(func.count()).select_from(UserModel).where(
                UserModel.username == username
            )
        )
        return (result.scalar() or 0) > 0

    async def nickname_exists(self, nickname: str) -> bool:
        """Check if nickname is already in use."""
        result = await self._session.execute(
            select(func.count()).select_from(UserModel).where(
                UserModel.nickname == nickname
            )
        )
        return (result.scalar() or 0) > 0

    async def add(self, entity: User) -> User:
        """Add new user."""
        model = UserModel.from_domain(entity)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Lost a race against a concurrent signup
            field = 'nickname' if 'nickname' in str(e.orig) else 'username'
            raise DuplicateEntityException('User', field, getattr(entity, field)) from e
        return model.to_domain()

    async def update_refresh_token_hash(self, id: UUID, token_hash: Optional[str]) -> None:
        """Overwrite the refresh token fingerprint (last write wins)."""
        await self._session.execute(
            update(UserModel)
            .where(UserModel.id == id)
            .values(refresh_token_hash=token_hash)
        )
        await self._session.flush()
