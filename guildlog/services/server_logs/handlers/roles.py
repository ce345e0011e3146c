"""
GuildLog - Role Log Formatters
==============================

Role creation, deletion and updates. Category: roles.

Only the role name and its permission set are tracked on update.
Colour, hoist, mentionable and position changes produce no log.
"""

from typing import Optional

import discord

from guildlog.core.config import EmbedColors
from guildlog.services.server_logs.audit import AuditResolver
from guildlog.services.server_logs.diff import enabled_permissions, set_diff
from guildlog.services.server_logs.formatting import (
    create_embed,
    discord_time,
    format_actor,
    truncate_text,
)


async def format_role_create(audit: AuditResolver, role: discord.Role) -> discord.Embed:
    creator = await audit.find_executor(role.guild, discord.AuditLogAction.role_create, role.id)

    embed = create_embed("Role Created", EmbedColors.ROLE_CREATE, description=f"{role.name} ({role.id})")
    embed.add_field(name="Created By", value=format_actor(creator), inline=False)
    return embed


async def format_role_delete(audit: AuditResolver, role: discord.Role) -> discord.Embed:
    deleter = await audit.find_executor(role.guild, discord.AuditLogAction.role_delete, role.id)

    embed = create_embed("Role Deleted", EmbedColors.ROLE_DELETE, description=f"{role.name} ({role.id})")
    embed.add_field(name="Deleted By", value=format_actor(deleter), inline=False)
    return embed


async def format_role_update(
    audit: AuditResolver,
    before: discord.Role,
    after: discord.Role,
) -> Optional[discord.Embed]:
    changes = []

    if before.name != after.name:
        changes.append(("Name", f'"{before.name}" ➜ "{after.name}"'))

    added, removed = set_diff(
        enabled_permissions(before.permissions),
        enabled_permissions(after.permissions),
    )
    if added:
        changes.append(("Permissions Added", truncate_text("\n".join(f"+ {p}" for p in sorted(added)))))
    if removed:
        changes.append(("Permissions Removed", truncate_text("\n".join(f"- {p}" for p in sorted(removed)))))

    if not changes:
        return None

    updater = await audit.find_executor(after.guild, discord.AuditLogAction.role_update, after.id)

    embed = create_embed("Role Updated", EmbedColors.ROLE_UPDATE, description=f"{after.name} ({after.id})")
    for name, value in changes:
        embed.add_field(name=name, value=value, inline=False)
    embed.add_field(name="Updated By", value=format_actor(updater), inline=False)
    embed.add_field(name="Time", value=discord_time(), inline=False)
    return embed
