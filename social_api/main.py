"""
FastAPI application entry point for the Social API.

This is the backend for:
- Account signup and username checks
- Login, refresh-token rotation and logout
- Access-token protected profile lookups
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import api_router
from .application.guards import AccessGuard, RefreshGuard
from .config import AppSettings, get_settings
from .domain.exceptions import (
    DomainException,
    DuplicateEntityException,
    ExternalServiceException,
    ValidationException,
)
from .infrastructure.database.connection import DatabaseManager, health_check, init_db
from .infrastructure.security import BcryptPasswordHasher, JWTHandler

logger = logging.getLogger(__name__)


def configure_logging(settings: AppSettings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def check_secrets(settings: AppSettings) -> None:
    """
    Refuse development token secrets in production, warn about them elsewhere.
    """
    if not settings.auth.uses_insecure_defaults:
        return

    if settings.is_production:
        raise RuntimeError(
            "ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must be set in production"
        )

    logger.warning(
        "Using insecure development token secrets. "
        "Set ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET before deploying."
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Manages startup and shutdown tasks.
    """
    settings: AppSettings = app.state.settings

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception:
        logger.exception("Database initialization failed")
        raise

    yield

    logger.info("Shutting down application...")
    await DatabaseManager.close()
    logger.info("Shutdown complete")


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application. Settings are read once
    here and handed to every component that needs them.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    check_secrets(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Social API - accounts and sessions",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    DatabaseManager.configure(settings.database)

    token_service = JWTHandler(settings.auth)
    app.state.settings = settings
    app.state.password_hasher = BcryptPasswordHasher(rounds=settings.auth.bcrypt_rounds)
    app.state.token_service = token_service
    app.state.access_guard = AccessGuard(token_service)
    app.state.refresh_guard = RefreshGuard(token_service)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
    )

    register_exception_handlers(app, settings)
    register_routes(app, settings)

    return app


def register_exception_handlers(app: FastAPI, settings: AppSettings) -> None:
    """Register global exception handlers."""

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=exc.to_dict(),
        )

    @app.exception_handler(ValidationException)
    async def validation_handler(request: Request, exc: ValidationException):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=exc.to_dict(),
        )

    @app.exception_handler(DuplicateEntityException)
    async def duplicate_handler(request: Request, exc: DuplicateEntityException):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=exc.to_dict(),
        )

    @app.exception_handler(ExternalServiceException)
    async def external_service_handler(request: Request, exc: ExternalServiceException):
        logger.error(f"Infrastructure failure on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                'error': 'INTERNAL_ERROR',
                'message': 'An internal error occurred',
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.url.path}")

        if settings.debug:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    'error': 'INTERNAL_ERROR',
                    'message': str(exc),
                    'type': type(exc).__name__,
                },
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                'error': 'INTERNAL_ERROR',
                'message': 'An internal error occurred',
            },
        )


def register_routes(app: FastAPI, settings: AppSettings) -> None:
    """Register API routes."""

    @app.get("/health", tags=["Health"])
    async def health():
        """Check application health."""
        db_ok = await health_check()

        return {
            'status': 'healthy' if db_ok else 'degraded',
            'services': {
                'database': 'up' if db_ok else 'down',
            },
            'version': settings.app_version,
            'environment': settings.environment,
        }

    main_router = APIRouter(prefix=settings.api_prefix)
    main_router.include_router(api_router)

    app.include_router(main_router)


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()

    uvicorn.run(
        "social_api.main:create_app",
        factory=True,
        host=_settings.host,
        port=_settings.port,
        reload=_settings.reload,
        workers=_settings.workers,
    )
