"""
GuildLog - Message Log Formatters
=================================

Message deletes and edits, reactions added and removed.
Category: message.
"""

from typing import Optional, Union

import discord

from guildlog.core.config import EmbedColors
from guildlog.core.constants import EMBED_DESCRIPTION_LIMIT
from guildlog.services.server_logs.audit import AuditResolver
from guildlog.services.server_logs.formatting import (
    create_embed,
    discord_time,
    format_actor,
    format_user,
    truncate_text,
)

UNKNOWN_CONTENT = "(unknown)"


def _mention(channel) -> str:
    return getattr(channel, "mention", None) or "Unknown"


# =============================================================================
# Deletes & Edits
# =============================================================================

async def format_message_delete(
    audit: AuditResolver,
    guild: discord.Guild,
    channel: Optional[discord.abc.GuildChannel],
    author: Union[discord.User, discord.Member, None],
    content: Optional[str],
) -> discord.Embed:
    """
    Deleted message. Author and content are None when the message was
    not in the client's cache.
    """
    deleter = await audit.find_message_delete_executor(
        guild,
        author.id if author else None,
        channel.id if channel else None,
    )

    embed = create_embed(
        "Message Deleted",
        EmbedColors.MESSAGE_DELETE,
        description=truncate_text(content, EMBED_DESCRIPTION_LIMIT) if content else "(no content)",
    )
    embed.add_field(name="Author", value=format_user(author), inline=False)
    embed.add_field(name="Channel", value=_mention(channel), inline=False)
    embed.add_field(name="Deleted By", value=format_actor(deleter), inline=False)
    embed.add_field(name="Time", value=discord_time(), inline=False)
    return embed


async def format_message_edit(
    audit: AuditResolver,
    before: Optional[str],
    after: Optional[str],
    author: Union[discord.User, discord.Member],
    channel: discord.abc.GuildChannel,
) -> Optional[discord.Embed]:
    """Content edits only. Embed unfurls and pin changes keep the same text."""
    before = before or UNKNOWN_CONTENT
    after = after or UNKNOWN_CONTENT
    if before == after:
        return None

    embed = create_embed("Message Edited", EmbedColors.MESSAGE_EDIT)
    embed.add_field(name="Author", value=format_user(author), inline=False)
    embed.add_field(name="Channel", value=_mention(channel), inline=False)
    embed.add_field(name="Before", value=truncate_text(before), inline=False)
    embed.add_field(name="After", value=truncate_text(after), inline=False)
    embed.add_field(name="Edited At", value=discord_time(), inline=False)
    return embed


# =============================================================================
# Reactions
# =============================================================================

def _reaction_embed(
    title: str,
    color: int,
    template: str,
    reaction: discord.Reaction,
    user: Union[discord.User, discord.Member],
) -> discord.Embed:
    message = reaction.message
    embed = create_embed(
        title,
        color,
        description=template.format(user=user, emoji=reaction.emoji, url=message.jump_url),
    )
    embed.add_field(name="Channel", value=_mention(message.channel), inline=True)
    embed.add_field(name="Message Author", value=str(message.author) if message.author else "Unknown", inline=True)
    return embed


async def format_reaction_add(
    audit: AuditResolver,
    reaction: discord.Reaction,
    user: Union[discord.User, discord.Member],
) -> discord.Embed:
    return _reaction_embed(
        "Reaction Added",
        EmbedColors.REACTION_ADD,
        "{user} reacted with {emoji} to [message]({url})",
        reaction,
        user,
    )


async def format_reaction_remove(
    audit: AuditResolver,
    reaction: discord.Reaction,
    user: Union[discord.User, discord.Member],
) -> discord.Embed:
    return _reaction_embed(
        "Reaction Removed",
        EmbedColors.REACTION_REMOVE,
        "{user} removed reaction {emoji} from [message]({url})",
        reaction,
        user,
    )
