"""
GuildLog - Member Events
========================

Member join, leave, update, ban and unban.
"""

from typing import TYPE_CHECKING, Union

import discord
from discord.ext import commands

from guildlog.core.logger import logger
from guildlog.services.server_logs import LogCategory
from guildlog.services.server_logs.handlers import (
    format_ban_add,
    format_ban_remove,
    format_member_join,
    format_member_remove,
    format_member_update,
)

if TYPE_CHECKING:
    from guildlog.bot import GuildLogBot


class MemberEvents(commands.Cog):
    """Member event handlers."""

    def __init__(self, bot: "GuildLogBot") -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_member_join(self, member: discord.Member) -> None:
        await self.bot.logging_service.dispatch(
            "on_member_join", member.guild, LogCategory.MEMBERS, format_member_join, member,
        )

    @commands.Cog.listener()
    async def on_member_remove(self, member: discord.Member) -> None:
        """Leave, kick or ban; the formatter tells them apart via audit log."""
        await self.bot.logging_service.dispatch(
            "on_member_remove", member.guild, LogCategory.MEMBERS, format_member_remove, member,
        )

    @commands.Cog.listener()
    async def on_member_update(self, before: discord.Member, after: discord.Member) -> None:
        await self.bot.logging_service.dispatch(
            "on_member_update", after.guild, LogCategory.MEMBERS, format_member_update, before, after,
        )

    # =========================================================================
    # Bans
    # =========================================================================

    @commands.Cog.listener()
    async def on_member_ban(
        self,
        guild: discord.Guild,
        user: Union[discord.User, discord.Member],
    ) -> None:
        await self.bot.logging_service.dispatch(
            "on_member_ban", guild, LogCategory.MEMBERS, format_ban_add, guild, user,
        )

    @commands.Cog.listener()
    async def on_member_unban(self, guild: discord.Guild, user: discord.User) -> None:
        await self.bot.logging_service.dispatch(
            "on_member_unban", guild, LogCategory.MEMBERS, format_ban_remove, guild, user,
        )


async def setup(bot: "GuildLogBot") -> None:
    """Add the member events cog to the bot."""
    await bot.add_cog(MemberEvents(bot))
    logger.debug("Member Events Loaded")
