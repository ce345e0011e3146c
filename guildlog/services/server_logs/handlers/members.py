"""
GuildLog - Member Log Formatters
================================

Joins, leaves, member updates, bans and unbans. Category: members.
"""

from typing import Optional, Union

import discord

from guildlog.core.config import EmbedColors
from guildlog.services.server_logs.audit import AuditResolver
from guildlog.services.server_logs.diff import set_diff
from guildlog.services.server_logs.formatting import (
    create_embed,
    discord_time,
    format_actor,
    format_user,
    truncate_text,
)


# =============================================================================
# Join / Leave
# =============================================================================

async def format_member_join(audit: AuditResolver, member: discord.Member) -> discord.Embed:
    embed = create_embed(
        "Member Joined",
        EmbedColors.MEMBER_JOIN,
        description=f"{format_user(member)} joined the server.",
    )
    embed.add_field(name="Joined At", value=discord_time(member.joined_at), inline=False)
    embed.add_field(name="Account Created", value=discord_time(member.created_at, "R"), inline=False)
    return embed


async def format_member_remove(audit: AuditResolver, member: discord.Member) -> discord.Embed:
    """Leave, kick or ban, told apart by the audit log."""
    removal = await audit.find_member_remove_executor(member.guild, member.id)

    if removal is None:
        reason = "Left or unknown"
    elif removal.action == discord.AuditLogAction.kick:
        reason = "Kicked"
    else:
        reason = "Banned"

    embed = create_embed(
        "Member Left",
        EmbedColors.MEMBER_LEAVE,
        description=f"{format_user(member)} left the server.",
    )
    embed.add_field(name="Time", value=discord_time(), inline=False)
    embed.add_field(name="Reason", value=reason, inline=False)
    embed.add_field(
        name="By",
        value=format_user(removal.executor) if removal and removal.executor else "Unknown",
        inline=False,
    )
    return embed


# =============================================================================
# Member Update
# =============================================================================

async def format_member_update(
    audit: AuditResolver,
    before: discord.Member,
    after: discord.Member,
) -> Optional[discord.Embed]:
    """Nickname and role changes. Anything else is ignored."""
    changes = []

    if before.nick != after.nick:
        changes.append(("Nickname", f'"{before.nick or "None"}" ➜ "{after.nick or "None"}"'))

    added, removed = set_diff(
        (role.id for role in before.roles),
        (role.id for role in after.roles),
    )
    if added:
        changes.append(("Roles Added", truncate_text(", ".join(f"<@&{rid}>" for rid in sorted(added)))))
    if removed:
        changes.append(("Roles Removed", truncate_text(", ".join(f"<@&{rid}>" for rid in sorted(removed)))))

    if not changes:
        return None

    executor = await audit.find_member_update_executor(after.guild, after.id)

    embed = create_embed("Member Updated", EmbedColors.MEMBER_UPDATE, description=format_user(after))
    for name, value in changes:
        embed.add_field(name=name, value=value, inline=False)
    embed.add_field(name="Updated By", value=format_actor(executor), inline=False)
    embed.add_field(name="Time", value=discord_time(), inline=False)
    return embed


# =============================================================================
# Bans
# =============================================================================

async def format_ban_add(
    audit: AuditResolver,
    guild: discord.Guild,
    user: Union[discord.User, discord.Member],
) -> discord.Embed:
    ban = await audit.find_executor(guild, discord.AuditLogAction.ban, user.id)

    embed = create_embed("Member Banned", EmbedColors.BAN_ADD, description=format_user(user))
    embed.add_field(
        name="Reason",
        value=truncate_text(ban.reason) if ban and ban.reason else "No reason provided",
        inline=False,
    )
    embed.add_field(name="Banned By", value=format_actor(ban), inline=False)
    embed.add_field(name="Banned At", value=discord_time(), inline=False)
    return embed


async def format_ban_remove(
    audit: AuditResolver,
    guild: discord.Guild,
    user: discord.User,
) -> discord.Embed:
    unban = await audit.find_executor(guild, discord.AuditLogAction.unban, user.id)

    embed = create_embed("Member Unbanned", EmbedColors.BAN_REMOVE, description=format_user(user))
    embed.add_field(name="Unbanned By", value=format_actor(unban), inline=False)
    embed.add_field(name="Unbanned At", value=discord_time(), inline=False)
    return embed
