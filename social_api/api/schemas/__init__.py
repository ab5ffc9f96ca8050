"""
Pydantic request/response schemas for API endpoints.
"""
from .auth_schemas import (
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

__all__ = [
    'ErrorResponse',
    'LoginRequest',
    'LoginResponse',
    'MessageResponse',
    'SignupRequest',
    'SignupResponse',
    'TokenResponse',
    'UsernameAvailabilityResponse',
    'UserResponse',
]
