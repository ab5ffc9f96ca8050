"""
FastAPI dependency injection providers.

App-scoped components (hasher, token service, guards) are built once in
``create_app`` and kept on ``app.state``. Repositories and services that
need a database session are built per request.
"""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import raise_for_error
from ..application.guards import AccessGuard, RefreshGuard
from ..application.interfaces.repositories import UserRepository
from ..application.interfaces.services import PasswordHasher, TokenService
from ..application.services import (
    AccountService,
    RefreshPrincipal,
    RefreshTokenStore,
    SessionManager,
)
from ..domain.entities.user import User
from ..infrastructure.database.connection import get_db
from ..infrastructure.database.repositories import SQLAlchemyUserRepository


def get_password_hasher(request: Request) -> PasswordHasher:
    """Get password hasher instance."""
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    """Get JWT handler instance."""
    return request.app.state.token_service


async def get_user_repository(
    session: AsyncSession = Depends(get_db),
) -> UserRepository:
    """Get user repository bound to the request's database session."""
    return SQLAlchemyUserRepository(session)


def get_session_manager(
    user_repository: UserRepository = Depends(get_user_repository),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
) -> SessionManager:
    """Get session manager instance."""
    return SessionManager(
        user_repository=user_repository,
        password_hasher=password_hasher,
        token_service=token_service,
        refresh_token_store=RefreshTokenStore(user_repository, password_hasher),
    )


def get_account_service(
    user_repository: UserRepository = Depends(get_user_repository),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> AccountService:
    """Get account service instance."""
    return AccountService(
        user_repository=user_repository,
        password_hasher=password_hasher,
    )


async def require_user(
    request: Request,
    user_repository: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Access-token guard.

    Resolves the account behind ``Authorization: Bearer <access token>``,
    attaches it as ``request.state.user`` and returns it. Raises
    HTTPException if not authenticated.
    """
    guard: AccessGuard = request.app.state.access_guard
    result = await guard.authorize(request.headers.get("Authorization"), user_repository)

    if not result.success:
        raise_for_error(result.error)

    request.state.user = result.user
    return result.user


def require_refresh_token(request: Request) -> RefreshPrincipal:
    """
    Refresh-token guard.

    Verifies ``Authorization: Bearer <refresh token>`` and attaches the
    subject plus raw token as ``request.state.refresh``.
    """
    guard: RefreshGuard = request.app.state.refresh_guard
    result = guard.authorize(request.headers.get("Authorization"))

    if not result.success:
        raise_for_error(result.error)

    request.state.refresh = result.refresh
    return result.refresh
