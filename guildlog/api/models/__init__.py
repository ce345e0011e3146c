"""
GuildLog - API Models
=====================

Pydantic models for request/response validation.
"""

from .base import APIResponse, SystemHealth
from .auth import DiscordGuild, DiscordUser, GuildBrief, SessionPayload, SessionUser
from .guilds import GuildConfigPayload, GuildConfigView, GuildConfigSaved, LogCategoryInfo, UserGuild


__all__ = [
    # base.py
    "APIResponse",
    "SystemHealth",
    # auth.py
    "DiscordGuild",
    "DiscordUser",
    "GuildBrief",
    "SessionPayload",
    "SessionUser",
    # guilds.py
    "GuildConfigPayload",
    "GuildConfigView",
    "GuildConfigSaved",
    "LogCategoryInfo",
    "UserGuild",
]
