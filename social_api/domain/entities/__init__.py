# Domain Entities
from .base import Entity, utc_now
from .user import User, UserProfile

__all__ = [
    'Entity',
    'User',
    'UserProfile',
    'utc_now',
]
