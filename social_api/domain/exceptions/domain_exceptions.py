"""
Exceptions raised by the domain and infrastructure layers.

Authentication outcomes are not exceptions; services report them through
result objects. What remains here are broken invariants, storage
conflicts, infrastructure failures and the token verification errors the
guards translate into results.
"""
from typing import Any, Dict, List, Optional


class DomainException(Exception):
    """
    Root of the project's exception tree.

    ``code`` is a stable machine-readable identifier, ``details`` extra
    context safe to show to API clients.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Render as a JSON error body."""
        return {
            'error': self.code,
            'message': self.message,
            'details': self.details
        }


class ValidationException(DomainException):
    """An entity was built with data that breaks its invariants."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, List[str]]] = None
    ):
        self.errors = errors or {}
        super().__init__(
            message=message,
            code='VALIDATION_ERROR',
            details={'validation_errors': self.errors}
        )


class DuplicateEntityException(DomainException):
    """
    A unique column rejected an insert.

    Raised by repositories when a concurrent request won the race between
    the availability check and the write.
    """

    def __init__(self, entity_type: str, field: str, value: Any):
        self.entity_type = entity_type
        self.field = field
        super().__init__(
            message=f"{entity_type} {field} is already taken",
            code='DUPLICATE_ENTITY',
            details={'entity_type': entity_type, 'field': field}
        )


class ExternalServiceException(DomainException):
    """
    Infrastructure the request depends on failed.

    Hashing or storage failures end up here. They are never reported as
    authentication failures.
    """

    def __init__(
        self,
        service: str,
        message: str,
        original_error: Optional[str] = None
    ):
        self.service = service
        super().__init__(
            message=f"{service}: {message}",
            code='EXTERNAL_SERVICE_ERROR',
            details={
                'service': service,
                'original_error': original_error
            }
        )


class TokenError(DomainException):
    """Base class for bearer token verification failures."""


class TokenExpiredError(TokenError):
    """Raised when a token's signature is valid but its expiry has passed."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message=message, code='TOKEN_EXPIRED')


class TokenInvalidError(TokenError):
    """Raised when a token is malformed, wrongly signed or of the wrong kind."""

    def __init__(self, message: str = "Token is invalid"):
        super().__init__(message=message, code='TOKEN_INVALID')
