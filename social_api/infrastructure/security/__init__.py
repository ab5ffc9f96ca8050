"""
Security infrastructure components.
"""
from .password_hasher import BcryptPasswordHasher
from .jwt_handler import JWTHandler

__all__ = [
    'BcryptPasswordHasher',
    'JWTHandler',
]
