"""
Core module containing configuration, database, models, errors and utilities
"""

from .config import config
from .database import get_db_manager, DatabaseManager

__all__ = [
    "config",
    "get_db_manager",
    "DatabaseManager"
]
