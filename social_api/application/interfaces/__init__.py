"""
Application ports.
"""
from .repositories import UserRepository
from .services import PasswordHasher, TokenClaims, TokenKind, TokenPair, TokenService

__all__ = [
    'PasswordHasher',
    'TokenClaims',
    'TokenKind',
    'TokenPair',
    'TokenService',
    'UserRepository',
]
