"""
GuildLog - Server Logging Service
=================================

The single "format and route" pipeline every guild event goes through.

DESIGN:
    Each event cog calls dispatch() with a formatter for its event type.
    dispatch() resolves the destination first, so a disabled category
    costs one cache lookup and no audit calls. It then asks the formatter
    for an embed; None means nothing observable changed. Any exception in
    routing, formatting or sending is caught and logged here, so one
    failing event never affects another.
"""

from typing import Any, Awaitable, Callable, Optional

import discord

from guildlog.core.logger import logger
from guildlog.services.server_logs.audit import AuditResolver
from guildlog.services.server_logs.categories import LogCategory
from guildlog.services.server_logs.router import LogRouter


Formatter = Callable[..., Awaitable[Optional[discord.Embed]]]
"""async formatter(audit, *payload) -> embed or None."""


class LoggingService:
    """
    Routes formatted guild events to their log channels.

    Attributes:
        router: Decides where (and whether) a category logs.
        audit: Best-effort actor lookups passed to every formatter.
    """

    def __init__(self, router: LogRouter, audit: AuditResolver) -> None:
        self.router = router
        self.audit = audit

        logger.tree("Logging Service Created", [
            ("Cache TTL", f"{router.cache.ttl}s"),
            ("Audit Lookup", f"{audit.lookup_limit} entries"),
        ], emoji="📋")

    async def dispatch(
        self,
        event_name: str,
        guild: Optional[discord.Guild],
        category: LogCategory,
        formatter: Formatter,
        *payload: Any,
    ) -> Optional[discord.Message]:
        """
        Format one event and send it to the guild's log channel.

        Args:
            event_name: Name used in error logs, e.g. "on_member_join".
            guild: Guild the event happened in. None is ignored.
            category: Category the event belongs to.
            formatter: Builds the embed from the payload.
            *payload: Event arguments passed through to the formatter.

        Returns:
            The sent message, or None if nothing was sent.
        """
        if guild is None:
            return None

        try:
            channel = await self.router.resolve_destination(guild, category)
            if channel is None:
                return None

            embed = await formatter(self.audit, *payload)
            if embed is None:
                return None

            message = await channel.send(embed=embed)
            logger.debug("Log Sent", [
                ("Event", event_name),
                ("Guild", str(guild.id)),
                ("Category", category.value),
                ("Channel", str(channel.id)),
            ])
            return message

        except discord.Forbidden:
            logger.warning("Log Send Forbidden", [
                ("Event", event_name),
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Category", category.value),
            ])
        except Exception as e:
            logger.error("Log Handler Failed", [
                ("Event", event_name),
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Category", category.value),
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:100]),
            ])
        return None
