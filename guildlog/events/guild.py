"""
GuildLog - Guild Events
=======================

Role, invite and emoji events.
"""

from typing import TYPE_CHECKING, Sequence

import discord
from discord.ext import commands

from guildlog.core.logger import logger
from guildlog.services.server_logs import LogCategory
from guildlog.services.server_logs.handlers import (
    format_emoji_create,
    format_emoji_delete,
    format_invite_create,
    format_invite_delete,
    format_role_create,
    format_role_delete,
    format_role_update,
)

if TYPE_CHECKING:
    from guildlog.bot import GuildLogBot


class GuildEvents(commands.Cog):
    """Role, invite and emoji event handlers."""

    def __init__(self, bot: "GuildLogBot") -> None:
        self.bot = bot

    # =========================================================================
    # Role Events
    # =========================================================================

    @commands.Cog.listener()
    async def on_guild_role_create(self, role: discord.Role) -> None:
        await self.bot.logging_service.dispatch(
            "on_guild_role_create", role.guild, LogCategory.ROLES, format_role_create, role,
        )

    @commands.Cog.listener()
    async def on_guild_role_delete(self, role: discord.Role) -> None:
        await self.bot.logging_service.dispatch(
            "on_guild_role_delete", role.guild, LogCategory.ROLES, format_role_delete, role,
        )

    @commands.Cog.listener()
    async def on_guild_role_update(self, before: discord.Role, after: discord.Role) -> None:
        await self.bot.logging_service.dispatch(
            "on_guild_role_update", after.guild, LogCategory.ROLES, format_role_update, before, after,
        )

    # =========================================================================
    # Invite Events
    # =========================================================================

    @commands.Cog.listener()
    async def on_invite_create(self, invite: discord.Invite) -> None:
        await self.bot.logging_service.dispatch(
            "on_invite_create", invite.guild, LogCategory.INVITES, format_invite_create, invite,
        )

    @commands.Cog.listener()
    async def on_invite_delete(self, invite: discord.Invite) -> None:
        await self.bot.logging_service.dispatch(
            "on_invite_delete", invite.guild, LogCategory.INVITES, format_invite_delete, invite,
        )

    # =========================================================================
    # Emoji Events
    # =========================================================================

    @commands.Cog.listener()
    async def on_guild_emojis_update(
        self,
        guild: discord.Guild,
        before: Sequence[discord.Emoji],
        after: Sequence[discord.Emoji],
    ) -> None:
        """Split the bulk update into one create or delete per emoji."""
        before_ids = {e.id for e in before}
        after_ids = {e.id for e in after}

        for emoji in after:
            if emoji.id not in before_ids:
                await self.bot.logging_service.dispatch(
                    "on_guild_emojis_update", guild, LogCategory.EMOJIS, format_emoji_create, emoji,
                )

        for emoji in before:
            if emoji.id not in after_ids:
                await self.bot.logging_service.dispatch(
                    "on_guild_emojis_update", guild, LogCategory.EMOJIS, format_emoji_delete, emoji,
                )


async def setup(bot: "GuildLogBot") -> None:
    """Add the guild events cog to the bot."""
    await bot.add_cog(GuildEvents(bot))
    logger.debug("Guild Events Loaded")
