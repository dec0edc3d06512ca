"""
Database Package - sidandtos persistence bootstrap
Opens the application SQLite database and creates the users and files tables
"""

from .errors import (
    ConnectionUnavailableError,
    DatabaseBootstrapError,
    DatabaseOpenError,
    SchemaInitError,
    StorageLocationError,
)
from .initialize_db import BootstrapState, DatabaseManager, initialize_database
from .settings import DatabaseSettings, get_database_settings

__all__ = [
    "BootstrapState",
    "ConnectionUnavailableError",
    "DatabaseBootstrapError",
    "DatabaseManager",
    "DatabaseOpenError",
    "DatabaseSettings",
    "SchemaInitError",
    "StorageLocationError",
    "get_database_settings",
    "initialize_database",
]
