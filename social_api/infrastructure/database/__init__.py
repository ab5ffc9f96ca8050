"""
Database infrastructure.
"""
from .connection import (
    DatabaseManager,
    get_db,
    get_db_session,
    health_check,
    init_db,
)

__all__ = [
    'DatabaseManager',
    'get_db',
    'get_db_session',
    'health_check',
    'init_db',
]
