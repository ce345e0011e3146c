"""
GuildLog - Guild Config Operations
==================================

Read and write per-guild logging configuration rows.

The dashboard is the only writer. The bot only reads, through the
config cache.
"""

import json
import time
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Set

from guildlog.core.logger import logger
from guildlog.core.database.models import GuildConfigRecord

if TYPE_CHECKING:
    from guildlog.core.database.manager import DatabaseManager


def _safe_json_loads(value: Optional[str]) -> dict:
    """Parse a JSON object column, returning {} when empty or corrupted."""
    if not value:
        return {}
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, ValueError):
        logger.warning("Corrupted JSON in guild_configs", [
            ("Value", value[:50]),
        ])
        return {}
    return parsed if isinstance(parsed, dict) else {}


class GuildConfigsMixin:
    """Mixin for guild_configs table operations."""

    def _row_to_guild_config(self, row) -> GuildConfigRecord:
        return GuildConfigRecord(
            guild_id=row["guild_id"],
            logs=_safe_json_loads(row["logs"]),
            log_channels=_safe_json_loads(row["log_channels"]),
            log_channel_id=row["log_channel_id"],
            updated_at=row["updated_at"],
        )

    def get_guild_config(self: "DatabaseManager", guild_id: int) -> Optional[GuildConfigRecord]:
        """Return the stored config for a guild, or None if never saved."""
        row = self.fetchone(
            "SELECT * FROM guild_configs WHERE guild_id = ?",
            (str(guild_id),)
        )
        if not row:
            return None
        return self._row_to_guild_config(row)

    def save_guild_config(
        self: "DatabaseManager",
        guild_id: int,
        logs: Dict[str, bool],
        log_channels: Dict[str, Optional[str]],
        log_channel_id: Optional[str],
    ) -> GuildConfigRecord:
        """
        Create or replace a guild's config and stamp updated_at.

        Returns:
            The record as stored.
        """
        now = time.time()
        self.execute(
            """INSERT INTO guild_configs (guild_id, logs, log_channels, log_channel_id, updated_at)
               VALUES (?, ?, ?, ?, ?)
               ON CONFLICT(guild_id) DO UPDATE SET
                   logs = excluded.logs,
                   log_channels = excluded.log_channels,
                   log_channel_id = excluded.log_channel_id,
                   updated_at = excluded.updated_at""",
            (str(guild_id), json.dumps(logs), json.dumps(log_channels), log_channel_id, now)
        )

        logger.tree("Guild Config Saved", [
            ("Guild ID", str(guild_id)),
            ("Enabled", ", ".join(k for k, v in logs.items() if v) or "None"),
            ("Fallback Channel", log_channel_id or "None"),
        ], emoji="💾")

        return GuildConfigRecord(
            guild_id=str(guild_id),
            logs=dict(logs),
            log_channels=dict(log_channels),
            log_channel_id=log_channel_id,
            updated_at=now,
        )

    def get_configured_guild_ids(self: "DatabaseManager", guild_ids: Iterable[int]) -> Set[int]:
        """Return which of the given guilds have a stored config."""
        ids = [str(gid) for gid in guild_ids]
        if not ids:
            return set()
        placeholders = ",".join("?" for _ in ids)
        rows = self.fetchall(
            f"SELECT guild_id FROM guild_configs WHERE guild_id IN ({placeholders})",
            tuple(ids)
        )
        return {int(row["guild_id"]) for row in rows}

    def delete_guild_config(self: "DatabaseManager", guild_id: int) -> bool:
        """Remove a guild's config. Returns True if a row was deleted."""
        cursor = self.execute(
            "DELETE FROM guild_configs WHERE guild_id = ?",
            (str(guild_id),)
        )
        return cursor.rowcount > 0
