"""
GuildLog - Channel Events
=========================

Channel and thread creation and deletion.
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from guildlog.core.logger import logger
from guildlog.services.server_logs import LogCategory
from guildlog.services.server_logs.handlers import (
    format_channel_create,
    format_channel_delete,
    format_thread_create,
    format_thread_delete,
)

if TYPE_CHECKING:
    from guildlog.bot import GuildLogBot


class ChannelEvents(commands.Cog):
    """Channel and thread event handlers."""

    def __init__(self, bot: "GuildLogBot") -> None:
        self.bot = bot

    # =========================================================================
    # Channel Events
    # =========================================================================

    @commands.Cog.listener()
    async def on_guild_channel_create(self, channel: discord.abc.GuildChannel) -> None:
        await self.bot.logging_service.dispatch(
            "on_guild_channel_create", channel.guild, LogCategory.CHANNELS, format_channel_create, channel,
        )

    @commands.Cog.listener()
    async def on_guild_channel_delete(self, channel: discord.abc.GuildChannel) -> None:
        await self.bot.logging_service.dispatch(
            "on_guild_channel_delete", channel.guild, LogCategory.CHANNELS, format_channel_delete, channel,
        )

    # =========================================================================
    # Thread Events
    # =========================================================================

    @commands.Cog.listener()
    async def on_thread_create(self, thread: discord.Thread) -> None:
        await self.bot.logging_service.dispatch(
            "on_thread_create", thread.guild, LogCategory.CHANNELS, format_thread_create, thread,
        )

    @commands.Cog.listener()
    async def on_thread_delete(self, thread: discord.Thread) -> None:
        await self.bot.logging_service.dispatch(
            "on_thread_delete", thread.guild, LogCategory.CHANNELS, format_thread_delete, thread,
        )


async def setup(bot: "GuildLogBot") -> None:
    """Add the channel events cog to the bot."""
    await bot.add_cog(ChannelEvents(bot))
    logger.debug("Channel Events Loaded")
