"""
Authentication API endpoints.
"""
from fastapi import APIRouter, Depends, Query, status

from ..dependencies import (
    get_account_service,
    get_session_manager,
    require_refresh_token,
    require_user,
)
from ..errors import raise_for_error
from ..schemas.auth_schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    UsernameAvailabilityResponse,
    UserResponse,
)
from ...application.services import AccountService, RefreshPrincipal, SessionManager
from ...domain.entities.user import User

router = APIRouter(tags=["Authentication"])


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Passwords do not match"},
        409: {"model": ErrorResponse, "description": "Username or nickname already exists"},
    },
)
async def signup(
    request: SignupRequest,
    account_service: AccountService = Depends(get_account_service),
):
    """
    Register a new user account.

    Returns the created user profile.
    """
    result = await account_service.register(
        username=request.username,
        password=request.password,
        confirm_password=request.confirm_password,
        nickname=request.nickname,
        profile_image=request.profile_image,
    )

    if not result.success:
        raise_for_error(result.error)

    return SignupResponse(
        message="Signup completed",
        user=UserResponse.model_validate(result.profile),
    )


@router.get(
    "/check-id",
    response_model=UsernameAvailabilityResponse,
)
async def check_id(
    username: str = Query(..., min_length=1, max_length=20),
    account_service: AccountService = Depends(get_account_service),
):
    """
    Check whether a username is still available.
    """
    available = await account_service.check_username(username)

    return UsernameAvailabilityResponse(
        available=available,
        message="Username is available" if available else "Username already exists",
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Authenticate user and return access/refresh tokens.

    Logging in replaces any previous session of the same user.
    """
    result = await session_manager.login(request.username, request.password)

    if not result.success:
        raise_for_error(result.error)

    return LoginResponse(
        message="Login successful",
        access_token=result.tokens.access_token,
        refresh_token=result.tokens.refresh_token,
        user=UserResponse.model_validate(result.profile),
    )


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Missing, invalid or expired refresh token"},
        403: {"model": ErrorResponse, "description": "Refresh token is not the current one"},
    },
)
async def refresh(
    principal: RefreshPrincipal = Depends(require_refresh_token),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Rotate tokens using the refresh token from the Authorization header.

    The presented refresh token is invalidated; only the returned one can
    be used next.
    """
    result = await session_manager.refresh(principal.user_id, principal.refresh_token)

    if not result.success:
        raise_for_error(result.error)

    return TokenResponse(
        access_token=result.tokens.access_token,
        refresh_token=result.tokens.refresh_token,
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(
    current_user: User = Depends(require_user),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Log out current user by discarding the stored refresh token fingerprint.
    """
    await session_manager.logout(current_user.id)

    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=UserResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_current_user_profile(
    current_user: User = Depends(require_user),
):
    """
    Get current authenticated user's profile.
    """
    return UserResponse.model_validate(current_user.to_profile())
