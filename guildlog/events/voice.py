"""
GuildLog - Voice Events
=======================
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from guildlog.core.logger import logger
from guildlog.services.server_logs import LogCategory
from guildlog.services.server_logs.handlers import format_voice_state

if TYPE_CHECKING:
    from guildlog.bot import GuildLogBot


class VoiceEvents(commands.Cog):
    """Voice state event handlers."""

    def __init__(self, bot: "GuildLogBot") -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_voice_state_update(
        self,
        member: discord.Member,
        before: discord.VoiceState,
        after: discord.VoiceState,
    ) -> None:
        await self.bot.logging_service.dispatch(
            "on_voice_state_update", member.guild, LogCategory.VOICE, format_voice_state, member, before, after,
        )


async def setup(bot: "GuildLogBot") -> None:
    """Add the voice events cog to the bot."""
    await bot.add_cog(VoiceEvents(bot))
    logger.debug("Voice Events Loaded")
