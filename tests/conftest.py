"""
Shared pytest fixtures for Social API tests.

Provides fixtures for:
- Auth settings with fast bcrypt and fixed test secrets
- In-memory user repository
- Hasher, JWT handler and session services
- API client (httpx)
"""
import os
from typing import Dict, Optional
from uuid import UUID

import pytest
import pytest_asyncio

# Test environment configuration
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-token-secret-0123456789abcdef")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-token-secret-0123456789abcdef")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from social_api.api.dependencies import get_user_repository
from social_api.application.interfaces.repositories import UserRepository
from social_api.application.services import AccountService, RefreshTokenStore, SessionManager
from social_api.config import AppSettings, AuthSettings
from social_api.domain.entities.user import User
from social_api.domain.exceptions import DuplicateEntityException
from social_api.infrastructure.security import BcryptPasswordHasher, JWTHandler
from social_api.main import create_app

TEST_ACCESS_SECRET = "test-access-token-secret-0123456789abcdef"
TEST_REFRESH_SECRET = "test-refresh-token-secret-0123456789abcdef"

ALICE_USERNAME = "alice"
ALICE_PASSWORD = "Secr3t!"


class InMemoryUserRepository(UserRepository):
    """Dictionary-backed user store for unit tests."""

    def __init__(self):
        self.users: Dict[UUID, User] = {}

    async def get_by_id(self, id: UUID) -> Optional[User]:
        return self.users.get(id)

    async def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    async def username_exists(self, username: str) -> bool:
        return any(u.username == username for u in self.users.values())

    async def nickname_exists(self, nickname: str) -> bool:
        return any(u.nickname == nickname for u in self.users.values())

    async def add(self, entity: User) -> User:
        if await self.username_exists(entity.username):
            raise DuplicateEntityException('User', 'username', entity.username)
        self.users[entity.id] = entity
        return entity

    async def update_refresh_token_hash(self, id: UUID, token_hash: Optional[str]) -> None:
        user = self.users.get(id)
        if user is not None:
            user.refresh_token_hash = token_hash


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings with distinct test secrets and the cheapest bcrypt cost."""
    return AuthSettings(
        access_token_secret=TEST_ACCESS_SECRET,
        refresh_token_secret=TEST_REFRESH_SECRET,
        access_token_ttl=900,
        refresh_token_ttl=3600,
        bcrypt_rounds=4,
    )


@pytest.fixture
def app_settings(auth_settings) -> AppSettings:
    return AppSettings(environment="test", auth=auth_settings)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def token_service(auth_settings) -> JWTHandler:
    return JWTHandler(auth_settings)


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def refresh_token_store(user_repository, password_hasher) -> RefreshTokenStore:
    return RefreshTokenStore(user_repository, password_hasher)


@pytest.fixture
def session_manager(
    user_repository, password_hasher, token_service, refresh_token_store
) -> SessionManager:
    return SessionManager(
        user_repository=user_repository,
        password_hasher=password_hasher,
        token_service=token_service,
        refresh_token_store=refresh_token_store,
    )


@pytest.fixture
def account_service(user_repository, password_hasher) -> AccountService:
    return AccountService(
        user_repository=user_repository,
        password_hasher=password_hasher,
    )


# ============================================================================
# Test Data Fixtures
# ============================================================================

@pytest.fixture
def alice_password() -> str:
    return ALICE_PASSWORD


@pytest_asyncio.fixture
async def alice(user_repository, password_hasher) -> User:
    """A registered user with no active session."""
    user = User(
        username=ALICE_USERNAME,
        password_hash=password_hasher.hash(ALICE_PASSWORD),
        nickname="Alice",
    )
    return await user_repository.add(user)


# ============================================================================
# API Client Fixtures
# ============================================================================

@pytest.fixture
def app(app_settings, user_repository):
    """Application wired to the in-memory repository."""
    application = create_app(app_settings)
    application.dependency_overrides[get_user_repository] = lambda: user_repository
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client(app):
    """
    Test API client for unit tests.

    Lifespan is not run, so no database connection is opened.
    """
    import httpx

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client
