"""
GuildLog - Message Events
=========================

Message deletes and edits, reactions added and removed.

DESIGN:
    discord.py only fires on_message_delete for cached messages, so
    on_raw_message_delete covers the rest with author and content
    unknown. Bot authors and IGNORED_BOT_IDS are never logged.
"""

from typing import TYPE_CHECKING, Optional, Union

import discord
from discord.ext import commands

from guildlog.core.config import get_config
from guildlog.core.logger import logger
from guildlog.services.server_logs import LogCategory
from guildlog.services.server_logs.handlers import (
    format_message_delete,
    format_message_edit,
    format_reaction_add,
    format_reaction_remove,
)

if TYPE_CHECKING:
    from guildlog.bot import GuildLogBot


class MessageEvents(commands.Cog):
    """Message event handlers."""

    def __init__(self, bot: "GuildLogBot") -> None:
        self.bot = bot
        self.config = get_config()

    def _should_skip(self, user: Optional[Union[discord.User, discord.Member]]) -> bool:
        if user is None:
            return False
        return user.bot or user.id in self.config.ignored_bot_ids

    # =========================================================================
    # Deletes & Edits
    # =========================================================================

    @commands.Cog.listener()
    async def on_message_delete(self, message: discord.Message) -> None:
        if message.guild is None or self._should_skip(message.author):
            return

        await self.bot.logging_service.dispatch(
            "on_message_delete",
            message.guild,
            LogCategory.MESSAGE,
            format_message_delete,
            message.guild,
            message.channel,
            message.author,
            message.content,
        )

    @commands.Cog.listener()
    async def on_raw_message_delete(self, payload: discord.RawMessageDeleteEvent) -> None:
        """Deletes of messages the client never cached."""
        if payload.cached_message is not None or payload.guild_id is None:
            return

        guild = self.bot.get_guild(payload.guild_id)
        if guild is None:
            return

        await self.bot.logging_service.dispatch(
            "on_raw_message_delete",
            guild,
            LogCategory.MESSAGE,
            format_message_delete,
            guild,
            guild.get_channel_or_thread(payload.channel_id),
            None,
            None,
        )

    @commands.Cog.listener()
    async def on_message_edit(self, before: discord.Message, after: discord.Message) -> None:
        if after.guild is None or self._should_skip(after.author):
            return

        await self.bot.logging_service.dispatch(
            "on_message_edit",
            after.guild,
            LogCategory.MESSAGE,
            format_message_edit,
            before.content,
            after.content,
            after.author,
            after.channel,
        )

    # =========================================================================
    # Reactions
    # =========================================================================

    @commands.Cog.listener()
    async def on_reaction_add(
        self,
        reaction: discord.Reaction,
        user: Union[discord.User, discord.Member],
    ) -> None:
        guild = reaction.message.guild
        if guild is None or self._should_skip(user):
            return

        await self.bot.logging_service.dispatch(
            "on_reaction_add", guild, LogCategory.MESSAGE, format_reaction_add, reaction, user,
        )

    @commands.Cog.listener()
    async def on_reaction_remove(
        self,
        reaction: discord.Reaction,
        user: Union[discord.User, discord.Member],
    ) -> None:
        guild = reaction.message.guild
        if guild is None or self._should_skip(user):
            return

        await self.bot.logging_service.dispatch(
            "on_reaction_remove", guild, LogCategory.MESSAGE, format_reaction_remove, reaction, user,
        )


async def setup(bot: "GuildLogBot") -> None:
    """Add the message events cog to the bot."""
    await bot.add_cog(MessageEvents(bot))
    logger.debug("Message Events Loaded")
