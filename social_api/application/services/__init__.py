"""
Application services.
"""
from .account_service import AccountService
from .refresh_token_store import RefreshTokenStore
from .results import AuthError, AuthResult, GuardResult, RefreshPrincipal
from .session_manager import SessionManager

__all__ = [
    'AccountService',
    'AuthError',
    'AuthResult',
    'GuardResult',
    'RefreshPrincipal',
    'RefreshTokenStore',
    'SessionManager',
]
