"""
GuildLog - Audit Resolver
=========================

Best-effort lookup of who performed an action, using the guild audit log.

Every lookup returns an AuditResult or None. Missing permissions, HTTP
errors and unexpected failures are logged here and never reach the
caller, so formatters can render "Unknown" without their own try/except.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

import discord

from guildlog.core.constants import AUDIT_LOOKUP_LIMIT
from guildlog.core.logger import logger


@dataclass(frozen=True)
class AuditResult:
    """Who performed an audited action, and which action matched."""
    executor: Union[discord.User, discord.Member, None]
    action: discord.AuditLogAction
    reason: Optional[str] = None


EntryFilter = Callable[[discord.AuditLogEntry], bool]


class AuditResolver:
    """Audit log lookups that never raise."""

    def __init__(self, lookup_limit: int = AUDIT_LOOKUP_LIMIT) -> None:
        self.lookup_limit = lookup_limit

    async def _search(
        self,
        guild: discord.Guild,
        action: discord.AuditLogAction,
        target_id: Optional[int],
        matches: Optional[EntryFilter] = None,
    ) -> Optional[AuditResult]:
        try:
            async for entry in guild.audit_logs(action=action, limit=self.lookup_limit):
                if target_id is not None and (entry.target is None or entry.target.id != target_id):
                    continue
                if matches is not None and not matches(entry):
                    continue
                return AuditResult(executor=entry.user, action=action, reason=entry.reason)
        except discord.Forbidden:
            logger.debug("Audit Log Access Denied", [
                ("Action", action.name),
                ("Guild", str(guild.id)),
            ])
        except discord.HTTPException as e:
            logger.warning("Audit Log Fetch Failed", [
                ("Action", action.name),
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Error", str(e)[:50]),
            ])
        except Exception as e:
            logger.warning("Audit Log Lookup Error", [
                ("Action", action.name),
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:50]),
            ])
        return None

    # =========================================================================
    # Lookups
    # =========================================================================

    async def find_executor(
        self,
        guild: discord.Guild,
        action: discord.AuditLogAction,
        target_id: Optional[int],
    ) -> Optional[AuditResult]:
        """Most recent entry of this action type whose target matches."""
        return await self._search(guild, action, target_id)

    async def find_member_remove_executor(
        self,
        guild: discord.Guild,
        user_id: int,
    ) -> Optional[AuditResult]:
        """Kick or ban that removed the member, kick checked first."""
        for action in (discord.AuditLogAction.kick, discord.AuditLogAction.ban):
            result = await self._search(guild, action, user_id)
            if result is not None:
                return result
        return None

    async def find_member_update_executor(
        self,
        guild: discord.Guild,
        user_id: int,
    ) -> Optional[AuditResult]:
        """Nickname changes are member_update; role changes are member_role_update."""
        for action in (discord.AuditLogAction.member_role_update, discord.AuditLogAction.member_update):
            result = await self._search(guild, action, user_id)
            if result is not None:
                return result
        return None

    async def find_message_delete_executor(
        self,
        guild: discord.Guild,
        author_id: Optional[int],
        channel_id: Optional[int],
    ) -> Optional[AuditResult]:
        """
        Moderator who deleted someone else's message.

        Discord only audits deletions by other users, so a self-delete
        resolves to None.
        """
        if author_id is None:
            return None

        def in_channel(entry: discord.AuditLogEntry) -> bool:
            extra_channel = getattr(entry.extra, "channel", None)
            return channel_id is None or extra_channel is None or extra_channel.id == channel_id

        return await self._search(guild, discord.AuditLogAction.message_delete, author_id, in_channel)

    async def find_invite_delete_executor(
        self,
        guild: discord.Guild,
        code: str,
    ) -> Optional[AuditResult]:
        """Invite audit targets are matched by code, not id."""

        def same_code(entry: discord.AuditLogEntry) -> bool:
            return getattr(entry.target, "code", None) == code

        return await self._search(guild, discord.AuditLogAction.invite_delete, None, same_code)
