"""
GuildLog - Voice Log Formatter
==============================

Category: voice.
"""

from typing import Optional

import discord

from guildlog.core.config import EmbedColors
from guildlog.services.server_logs.audit import AuditResolver
from guildlog.services.server_logs.formatting import create_embed, discord_time, format_user


async def format_voice_state(
    audit: AuditResolver,
    member: discord.Member,
    before: discord.VoiceState,
    after: discord.VoiceState,
) -> Optional[discord.Embed]:
    """Join, leave or switch. Mute, deafen and stream toggles are ignored."""
    old_channel = before.channel
    new_channel = after.channel

    if old_channel is None and new_channel is not None:
        action = "Joined VC"
        channel_text = new_channel.mention
    elif old_channel is not None and new_channel is None:
        action = "Left VC"
        channel_text = old_channel.mention
    elif old_channel is not None and new_channel is not None and old_channel.id != new_channel.id:
        action = "Switched VC"
        channel_text = f"{old_channel.mention} ➜ {new_channel.mention}"
    else:
        return None

    embed = create_embed(action, EmbedColors.VOICE, description=format_user(member))
    embed.add_field(name="Channel", value=channel_text, inline=False)
    embed.add_field(name="Time", value=discord_time(), inline=False)
    return embed
