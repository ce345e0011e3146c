"""
GuildLog - Channel Log Formatters
=================================

Channel and thread creation and deletion. Category: channels.
"""

import discord

from guildlog.core.config import EmbedColors
from guildlog.services.server_logs.audit import AuditResolver
from guildlog.services.server_logs.formatting import create_embed, format_actor


def _parent(thread: discord.Thread) -> str:
    parent = thread.parent
    return parent.mention if parent is not None else "Unknown"


async def format_channel_create(
    audit: AuditResolver,
    channel: discord.abc.GuildChannel,
) -> discord.Embed:
    creator = await audit.find_executor(channel.guild, discord.AuditLogAction.channel_create, channel.id)

    embed = create_embed(
        "Channel Created",
        EmbedColors.CHANNEL_CREATE,
        description=f"{channel.mention} ({channel.id})",
    )
    embed.add_field(name="Created By", value=format_actor(creator), inline=False)
    return embed


async def format_channel_delete(
    audit: AuditResolver,
    channel: discord.abc.GuildChannel,
) -> discord.Embed:
    deleter = await audit.find_executor(channel.guild, discord.AuditLogAction.channel_delete, channel.id)

    embed = create_embed(
        "Channel Deleted",
        EmbedColors.CHANNEL_DELETE,
        description=f"{channel.name or 'Unknown'} ({channel.id})",
    )
    embed.add_field(name="Deleted By", value=format_actor(deleter), inline=False)
    return embed


async def format_thread_create(audit: AuditResolver, thread: discord.Thread) -> discord.Embed:
    embed = create_embed(
        "Thread Created",
        EmbedColors.THREAD_CREATE,
        description=f"{thread.mention} ({thread.id})",
    )
    embed.add_field(name="Parent Channel", value=_parent(thread), inline=True)
    embed.add_field(
        name="Created By",
        value=f"<@{thread.owner_id}>" if thread.owner_id else "Unknown",
        inline=True,
    )
    return embed


async def format_thread_delete(audit: AuditResolver, thread: discord.Thread) -> discord.Embed:
    embed = create_embed(
        "Thread Deleted",
        EmbedColors.THREAD_DELETE,
        description=f"{thread.name} ({thread.id})",
    )
    embed.add_field(name="Parent Channel", value=_parent(thread), inline=True)
    return embed
