"""
GuildLog - Log Router
=====================

Decides whether a category is logged in a guild and where.

The router never sends anything. It returns a channel or None, and the
caller decides what to do with it.
"""

from typing import Optional

import discord

from guildlog.core.logger import logger
from guildlog.services.server_logs.cache import GuildConfigCache, StoreUnavailable
from guildlog.services.server_logs.categories import LogCategory


class LogRouter:
    """Resolves the destination channel for a guild and category."""

    def __init__(self, cache: GuildConfigCache) -> None:
        self.cache = cache

    async def resolve_destination(
        self,
        guild: discord.Guild,
        category: LogCategory,
    ) -> Optional[discord.abc.GuildChannel]:
        """
        Return the channel a category logs to, or None if it is inactive.

        A category is active when it is enabled, has a per-category or
        fallback channel, and that channel still exists in the guild.
        A store failure counts as disabled.
        """
        try:
            config = await self.cache.get(guild.id)
        except StoreUnavailable as e:
            logger.warning("Guild Config Unavailable", [
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Category", category.value),
                ("Error", str(e.cause)[:100]),
            ])
            return None

        if config is None or not config.is_enabled(category):
            return None

        channel_id = config.channel_id_for(category)
        if channel_id is None:
            logger.debug("No Log Channel Configured", [
                ("Guild", str(guild.id)),
                ("Category", category.value),
            ])
            return None

        channel = guild.get_channel(channel_id)
        if channel is None:
            logger.warning("Log Channel Missing", [
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Category", category.value),
                ("Channel ID", str(channel_id)),
            ])
            return None

        return channel
