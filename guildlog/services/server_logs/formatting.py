"""
GuildLog - Embed Formatting
===========================

Shared helpers used by every log formatter.
"""

from datetime import datetime, timezone
from typing import Optional, Union

import discord

from guildlog.core.constants import EMBED_FIELD_LIMIT
from guildlog.services.server_logs.audit import AuditResult

UNKNOWN = "Unknown"


def truncate_text(text: Optional[str], max_length: int = EMBED_FIELD_LIMIT) -> Optional[str]:
    """Cut text to max_length, ending in "..." when shortened."""
    if not text or len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def create_embed(
    title: str,
    color: int,
    description: Optional[str] = None,
    footer: Optional[str] = None,
) -> discord.Embed:
    """Create a log embed stamped with the current time."""
    embed = discord.Embed(
        title=title,
        description=description,
        color=color,
        timestamp=datetime.now(timezone.utc),
    )
    if footer:
        embed.set_footer(text=footer)
    return embed


def discord_time(when: Optional[datetime] = None, style: str = "f") -> str:
    """Discord timestamp markup, e.g. <t:1700000000:f>."""
    when = when or datetime.now(timezone.utc)
    return f"<t:{int(when.timestamp())}:{style}>"


def format_user(user: Union[discord.User, discord.Member, None]) -> str:
    """Render as "name (id)"."""
    if user is None:
        return UNKNOWN
    return f"{user} ({user.id})"


def format_actor(result: Optional[AuditResult]) -> str:
    """Render an audit executor as "<@id> (name)", or Unknown."""
    if result is None or result.executor is None:
        return UNKNOWN
    executor = result.executor
    return f"<@{executor.id}> ({executor})"
