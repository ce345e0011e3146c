"""
GuildLog - Database Package
===========================

SQLite-backed store for guild logging configuration.
"""

from guildlog.core.database.manager import (
    DatabaseManager,
    get_db,
    DATA_DIR,
    DB_PATH,
)
from guildlog.core.database.models import GuildConfigRecord

__all__ = [
    "DatabaseManager",
    "get_db",
    "DATA_DIR",
    "DB_PATH",
    "GuildConfigRecord",
]
