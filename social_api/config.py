"""
Configuration management for the Social API.

Uses Pydantic settings for validation and environment variable support.
"""
from datetime import timedelta
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Development-only fallbacks. Production startup refuses them.
INSECURE_ACCESS_SECRET = 'insecure-dev-access-token-secret-change-me'
INSECURE_REFRESH_SECRET = 'insecure-dev-refresh-token-secret-change-me'


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(
        env_prefix='DB_',
        env_file='.env',
        extra='ignore'
    )

    host: str = Field(default='localhost', description='Database host')
    port: int = Field(default=5432, description='Database port')
    name: str = Field(default='social', description='Database name')
    user: str = Field(default='postgres', description='Database user')
    password: str = Field(default='postgres', description='Database password')
    pool_size: int = Field(default=5, description='Connection pool size')
    max_overflow: int = Field(default=10, description='Max overflow connections')
    echo_sql: bool = Field(default=False, description='Echo SQL queries')

    @property
    def url(self) -> str:
        """Build database URL."""
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class AuthSettings(BaseSettings):
    """
    Token and password hashing configuration.

    Read from ACCESS_TOKEN_SECRET, REFRESH_TOKEN_SECRET, ACCESS_TOKEN_TTL
    and REFRESH_TOKEN_TTL. TTLs are given in seconds.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        extra='ignore'
    )

    access_token_secret: str = Field(
        default=INSECURE_ACCESS_SECRET,
        description='Secret key for signing access tokens'
    )
    refresh_token_secret: str = Field(
        default=INSECURE_REFRESH_SECRET,
        description='Secret key for signing refresh tokens'
    )
    access_token_ttl: int = Field(
        default=15 * 60,
        gt=0,
        description='Access token lifetime in seconds'
    )
    refresh_token_ttl: int = Field(
        default=7 * 24 * 60 * 60,
        gt=0,
        description='Refresh token lifetime in seconds'
    )
    algorithm: str = Field(default='HS256', description='JWT algorithm')
    issuer: Optional[str] = Field(default='social-api', description='JWT token issuer')
    bcrypt_rounds: int = Field(
        default=10,
        ge=4,
        le=31,
        description='bcrypt work factor for passwords and refresh token fingerprints'
    )

    @model_validator(mode='after')
    def check_token_policy(self) -> 'AuthSettings':
        """Access tokens must expire first and the two kinds must not share a key."""
        if self.access_token_ttl >= self.refresh_token_ttl:
            raise ValueError('ACCESS_TOKEN_TTL must be shorter than REFRESH_TOKEN_TTL')
        if self.access_token_secret == self.refresh_token_secret:
            raise ValueError('ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must differ')
        return self

    @property
    def access_ttl(self) -> timedelta:
        return timedelta(seconds=self.access_token_ttl)

    @property
    def refresh_ttl(self) -> timedelta:
        return timedelta(seconds=self.refresh_token_ttl)

    @property
    def uses_insecure_defaults(self) -> bool:
        """Check if either signing secret is still a development fallback."""
        return (
            self.access_token_secret == INSECURE_ACCESS_SECRET
            or self.refresh_token_secret == INSECURE_REFRESH_SECRET
        )


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(
        env_prefix='CORS_',
        env_file='.env',
        extra='ignore'
    )

    allowed_origins: List[str] = Field(
        default=['http://localhost:3000', 'http://127.0.0.1:3000'],
        description='Allowed origins for CORS'
    )
    allow_credentials: bool = Field(default=True)
    allowed_methods: List[str] = Field(default=['GET', 'POST', 'PUT', 'DELETE', 'PATCH'])
    allowed_headers: List[str] = Field(default=['*'])


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Application
    app_name: str = Field(default='Social API')
    app_version: str = Field(default='1.0.0')
    debug: bool = Field(default=False)
    environment: str = Field(default='development')  # development, staging, production

    # Server
    host: str = Field(default='0.0.0.0')
    port: int = Field(default=3001)
    workers: int = Field(default=1)
    reload: bool = Field(default=False)

    # API
    api_prefix: str = Field(default='')

    # Logging
    log_level: str = Field(default='INFO')

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == 'production'


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get cached application settings.

    Uses LRU cache to avoid re-reading environment variables on every access.
    """
    return AppSettings()
