"""
Mapping of authentication error kinds to HTTP responses.

Messages are fixed per kind so responses never reveal which check failed
beyond what the client needs.
"""
from typing import Dict, NoReturn, Tuple

from fastapi import HTTPException, status

from ..application.services.results import AuthError

_ERROR_RESPONSES: Dict[AuthError, Tuple[int, str]] = {
    AuthError.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "Invalid username or password"),
    AuthError.TOKEN_MISSING: (status.HTTP_401_UNAUTHORIZED, "Authentication required"),
    AuthError.TOKEN_EXPIRED: (status.HTTP_401_UNAUTHORIZED, "Token has expired"),
    AuthError.TOKEN_INVALID: (status.HTTP_401_UNAUTHORIZED, "Invalid token"),
    AuthError.ACCOUNT_MISSING: (status.HTTP_401_UNAUTHORIZED, "Invalid token"),
    # Missing and mismatched sessions look the same to the client
    AuthError.SESSION_NOT_FOUND: (status.HTTP_403_FORBIDDEN, "Access denied"),
    AuthError.TOKEN_REUSED: (status.HTTP_403_FORBIDDEN, "Access denied"),
    AuthError.USERNAME_TAKEN: (status.HTTP_409_CONFLICT, "Username is already in use"),
    AuthError.NICKNAME_TAKEN: (status.HTTP_409_CONFLICT, "Nickname is already in use"),
    AuthError.PASSWORD_MISMATCH: (status.HTTP_400_BAD_REQUEST, "Passwords do not match"),
}


def to_http_exception(error: AuthError) -> HTTPException:
    """Build the client-facing exception for an error kind."""
    status_code, detail = _ERROR_RESPONSES[error]
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


def raise_for_error(error: AuthError) -> NoReturn:
    """Raise the client-facing exception for an error kind."""
    raise to_http_exception(error)
