"""
GuildLog - Guild Config Store
=============================

Async adapter between the config cache and the SQLite database.
"""

import asyncio
from typing import TYPE_CHECKING, Optional

from guildlog.services.server_logs.models import GuildLogConfig

if TYPE_CHECKING:
    from guildlog.core.database import DatabaseManager


class GuildConfigStore:
    """Reads guild configs off the event loop and returns snapshots."""

    def __init__(self, db: "DatabaseManager") -> None:
        self._db = db

    async def fetch(self, guild_id: int) -> Optional[GuildLogConfig]:
        """Return the guild's config snapshot, or None if it has none."""
        record = await asyncio.to_thread(self._db.get_guild_config, guild_id)
        if record is None:
            return None
        return GuildLogConfig.from_record(record)
