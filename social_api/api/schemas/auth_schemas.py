"""
Pydantic schemas for authentication endpoints.

JSON keys are camelCase on the wire; Python attributes stay snake_case.
"""
import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9!@#$%^&*_-]+$')
NICKNAME_PATTERN = re.compile(r'^(?=.*[a-zA-Z])[a-zA-Z0-9!@#$%^&*_.\-]+$')
PASSWORD_SPECIALS = '!@#$%^&*'
BCRYPT_MAX_BYTES = 72


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SignupRequest(CamelModel):
    """User registration request."""

    username: str = Field(..., min_length=4, max_length=20, description="Login name")
    password: str = Field(
        ...,
        min_length=8,
        max_length=20,
        description="Password (8-20 chars, must include a letter, a digit and one of !@#$%^&*)"
    )
    confirm_password: str = Field(..., min_length=1, description="Password confirmation")
    nickname: str = Field(..., min_length=2, max_length=20, description="Display name")
    profile_image: Optional[str] = Field(None, max_length=512, description="Avatar URL")

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate allowed username characters."""
        if not USERNAME_PATTERN.match(v):
            raise ValueError('Username may only contain letters, digits and !@#$%^&*_-')
        return v

    @field_validator('password')
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """Validate password meets security requirements."""
        if not any(c.isascii() and c.isalpha() for c in v):
            raise ValueError('Password must contain at least one letter')
        if not any(c.isdigit() for c in v):
            raise ValueError('Password must contain at least one digit')
        if not any(c in PASSWORD_SPECIALS for c in v):
            raise ValueError('Password must contain at least one of !@#$%^&*')
        if len(v.encode('utf-8')) > BCRYPT_MAX_BYTES:
            raise ValueError('Password is too long')
        return v

    @field_validator('nickname')
    @classmethod
    def validate_nickname(cls, v: str) -> str:
        """Validate nickname characters; at least one letter is required."""
        if not NICKNAME_PATTERN.match(v):
            raise ValueError('Nickname must contain a letter and may only use letters, digits and !@#$%^&*_.-')
        return v


class LoginRequest(CamelModel):
    """User login request."""

    username: str = Field(..., min_length=1, description="Login name")
    password: str = Field(..., min_length=1, description="User password")


class UserResponse(CamelModel):
    """Public user profile."""

    id: UUID
    username: str
    nickname: str
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime


class TokenResponse(CamelModel):
    """Token pair returned by the refresh endpoint."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")


class LoginResponse(TokenResponse):
    """Login response: token pair plus the public profile."""

    message: str
    user: UserResponse


class SignupResponse(CamelModel):
    """Registration response."""

    message: str
    user: UserResponse


class UsernameAvailabilityResponse(CamelModel):
    """Result of a username availability check."""

    available: bool
    message: str


class MessageResponse(CamelModel):
    """Generic message response."""

    message: str


class ErrorResponse(BaseModel):
    """Error body produced by HTTPException."""

    detail: str
