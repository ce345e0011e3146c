"""
GuildLog - Database Manager
===========================

SQLite manager for the guild config store.
"""

import sqlite3
import threading
from pathlib import Path
from typing import List, Optional, Tuple

from guildlog.core.logger import logger
from guildlog.core.constants import DB_CONNECTION_TIMEOUT, SQLITE_BUSY_TIMEOUT
from guildlog.core.database.schema import SchemaMixin
from guildlog.core.database.guild_configs import GuildConfigsMixin


# =============================================================================
# Constants
# =============================================================================

DATA_DIR: Path = Path("data")
DB_PATH: Path = DATA_DIR / "guildlog.db"


# =============================================================================
# Database Manager (Singleton)
# =============================================================================

class DatabaseManager(SchemaMixin, GuildConfigsMixin):
    """
    Thread-safe database manager.

    DESIGN: One connection per process, shared by the bot's worker threads
    and the dashboard's request handlers. WAL mode lets reads proceed while
    a dashboard write commits. Every statement runs under a lock.
    """

    _instance: Optional["DatabaseManager"] = None
    _lock: threading.Lock = threading.Lock()

    def __new__(cls, db_path: Optional[Path] = None) -> "DatabaseManager":
        """Singleton - later calls return the first instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, db_path: Optional[Path] = None) -> None:
        if self._initialized:
            return

        self._db_lock: threading.Lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None
        self.db_path: Path = Path(db_path) if db_path else DB_PATH

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connect()
        self._init_tables()
        self._initialized = True

        logger.tree("Database Manager Initialized", [
            ("Path", str(self.db_path)),
            ("WAL Mode", "Enabled"),
        ], emoji="🗄️")

    # =========================================================================
    # Connection Management
    # =========================================================================

    def _connect(self) -> None:
        try:
            self._conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                timeout=DB_CONNECTION_TIMEOUT,
            )
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT}")
            self._conn.row_factory = sqlite3.Row
        except sqlite3.Error as e:
            logger.error("Database Connection Failed", [
                ("Path", str(self.db_path)),
                ("Error", str(e)),
            ])
            raise

    def _ensure_connection(self) -> sqlite3.Connection:
        """Return a live connection, reconnecting if it was closed."""
        if self._conn is None:
            self._connect()
        try:
            self._conn.execute("SELECT 1")
        except sqlite3.Error:
            self._connect()
        return self._conn

    def execute(self, query: str, params: Tuple = (), commit: bool = True) -> sqlite3.Cursor:
        with self._db_lock:
            conn = self._ensure_connection()
            cursor = conn.cursor()
            cursor.execute(query, params)
            if commit:
                conn.commit()
            return cursor

    def fetchone(self, query: str, params: Tuple = ()) -> Optional[sqlite3.Row]:
        with self._db_lock:
            cursor = self._ensure_connection().execute(query, params)
            return cursor.fetchone()

    def fetchall(self, query: str, params: Tuple = ()) -> List[sqlite3.Row]:
        with self._db_lock:
            cursor = self._ensure_connection().execute(query, params)
            return cursor.fetchall()

    def close(self) -> None:
        with self._db_lock:
            if self._conn:
                self._conn.close()
                self._conn = None
                logger.info("Database Connection Closed")


# =============================================================================
# Global Instance
# =============================================================================

def get_db(db_path: Optional[Path] = None) -> DatabaseManager:
    """
    Get the global database manager.

    The path is only honoured by the first call in a process.
    """
    return DatabaseManager(db_path)


__all__ = ["DatabaseManager", "get_db", "DB_PATH", "DATA_DIR"]
