"""
SQLite profile store
"""

from database.db_manager import DatabaseManager

__all__ = [
    'DatabaseManager',
]
