"""
GuildLog - Database Type Definitions
====================================

TypedDict shapes of rows returned by the database layer.
"""

from typing import Dict, Optional, TypedDict


class GuildConfigRecord(TypedDict, total=False):
    """A guild's logging configuration document."""
    guild_id: str
    logs: Dict[str, bool]
    log_channels: Dict[str, Optional[str]]
    log_channel_id: Optional[str]
    updated_at: float


__all__ = ["GuildConfigRecord"]
