"""
GuildLog - Emoji Log Formatters
===============================

Category: emojis.
"""

import discord

from guildlog.core.config import EmbedColors
from guildlog.services.server_logs.audit import AuditResolver
from guildlog.services.server_logs.formatting import create_embed, format_actor


async def format_emoji_create(audit: AuditResolver, emoji: discord.Emoji) -> discord.Embed:
    creator = await audit.find_executor(emoji.guild, discord.AuditLogAction.emoji_create, emoji.id)

    embed = create_embed("Emoji Created", EmbedColors.EMOJI_CREATE, description=f"{emoji} ({emoji.name})")
    embed.add_field(name="Animated", value="Yes" if emoji.animated else "No", inline=True)
    embed.add_field(name="Created By", value=format_actor(creator), inline=True)
    return embed


async def format_emoji_delete(audit: AuditResolver, emoji: discord.Emoji) -> discord.Embed:
    deleter = await audit.find_executor(emoji.guild, discord.AuditLogAction.emoji_delete, emoji.id)

    embed = create_embed("Emoji Deleted", EmbedColors.EMOJI_DELETE, description=f"{emoji.name} ({emoji.id})")
    embed.add_field(name="Animated", value="Yes" if emoji.animated else "No", inline=True)
    embed.add_field(name="Deleted By", value=format_actor(deleter), inline=True)
    return embed
