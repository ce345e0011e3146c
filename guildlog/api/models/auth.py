"""
GuildLog - Auth API Models
==========================

Discord OAuth payloads and the dashboard session.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from guildlog.core.constants import ADMINISTRATOR_PERMISSION


class DiscordGuild(BaseModel):
    """One entry of Discord's GET /users/@me/guilds."""

    id: str
    name: str
    icon: Optional[str] = None
    owner: bool = False
    permissions: int = 0

    @property
    def is_admin(self) -> bool:
        return (self.permissions & ADMINISTRATOR_PERMISSION) == ADMINISTRATOR_PERMISSION


class DiscordUser(BaseModel):
    """Subset of Discord's GET /users/@me."""

    id: str
    username: str
    global_name: Optional[str] = None
    avatar: Optional[str] = None


class GuildBrief(BaseModel):
    """A guild the session user administers."""

    id: str
    name: str
    icon: Optional[str] = None


class SessionPayload(BaseModel):
    """Decoded dashboard session token."""

    sub: int = Field(description="Discord user ID")
    username: str
    guilds: List[GuildBrief] = Field(default_factory=list)
    iat: datetime
    exp: datetime

    def find_guild(self, guild_id: str) -> Optional[GuildBrief]:
        return next((g for g in self.guilds if g.id == guild_id), None)


class SessionUser(BaseModel):
    """What /dashboard returns about the signed-in admin."""

    id: str
    username: str
    guilds: List[GuildBrief]
    expires_at: datetime


__all__ = ["DiscordGuild", "DiscordUser", "GuildBrief", "SessionPayload", "SessionUser"]
