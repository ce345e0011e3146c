"""
GuildLog - Database Schema
==========================

Table definitions.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from guildlog.core.database.manager import DatabaseManager


class SchemaMixin:
    """Mixin for database schema initialization."""

    def _init_tables(self: "DatabaseManager") -> None:
        """Create tables if they do not exist, so restarts are safe."""
        conn = self._ensure_connection()
        cursor = conn.cursor()

        # -----------------------------------------------------------------
        # Guild Configs
        # One row per guild. logs and log_channels are JSON objects keyed
        # by category; log_channel_id is the fallback destination.
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS guild_configs (
                guild_id TEXT PRIMARY KEY,
                logs TEXT NOT NULL DEFAULT '{}',
                log_channels TEXT NOT NULL DEFAULT '{}',
                log_channel_id TEXT,
                updated_at REAL NOT NULL
            )
        """)

        conn.commit()
