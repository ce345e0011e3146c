"""
GuildLog - Invite Log Formatters
================================

Category: invites.
"""

import discord

from guildlog.core.config import EmbedColors
from guildlog.services.server_logs.audit import AuditResolver
from guildlog.services.server_logs.formatting import create_embed, discord_time, format_actor


def _channel(invite: discord.Invite) -> str:
    channel = invite.channel
    return getattr(channel, "mention", None) or "Unknown"


async def format_invite_create(audit: AuditResolver, invite: discord.Invite) -> discord.Embed:
    embed = create_embed(
        "Invite Created",
        EmbedColors.INVITE_CREATE,
        description=f"Invite code: {invite.code}",
    )
    embed.add_field(name="Channel", value=_channel(invite), inline=True)
    embed.add_field(name="Max Uses", value=str(invite.max_uses) if invite.max_uses else "Unlimited", inline=True)
    embed.add_field(
        name="Expires",
        value=discord_time(invite.expires_at, "R") if invite.expires_at else "Never",
        inline=True,
    )
    inviter = invite.inviter
    embed.add_field(
        name="Created By",
        value=f"<@{inviter.id}> ({inviter})" if inviter else "Unknown",
        inline=False,
    )
    return embed


async def format_invite_delete(audit: AuditResolver, invite: discord.Invite) -> discord.Embed:
    deleter = await audit.find_invite_delete_executor(invite.guild, invite.code)

    embed = create_embed(
        "Invite Deleted",
        EmbedColors.INVITE_DELETE,
        description=f"Invite code: {invite.code}",
    )
    embed.add_field(name="Channel", value=_channel(invite), inline=True)
    embed.add_field(name="Deleted By", value=format_actor(deleter), inline=False)
    return embed
