"""
SQLAlchemy ORM models.
"""
from .base import Base, BaseModel
from .user_model import UserModel

__all__ = [
    'Base',
    'BaseModel',
    'UserModel',
]
