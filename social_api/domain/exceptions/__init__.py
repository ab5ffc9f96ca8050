# Domain Exceptions
from .domain_exceptions import (
    DomainException,
    DuplicateEntityException,
    ExternalServiceException,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    ValidationException,
)

__all__ = [
    'DomainException',
    'DuplicateEntityException',
    'ExternalServiceException',
    'TokenError',
    'TokenExpiredError',
    'TokenInvalidError',
    'ValidationException',
]
