"""
GuildLog - Guild Config API Models
==================================

Request and response bodies for the guild configuration endpoints.
Field names are camelCase on the wire.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from guildlog.core.database.models import GuildConfigRecord
from guildlog.services.server_logs.categories import CATEGORY_KEYS


def _check_categories(keys: Iterable[str]) -> None:
    unknown = sorted(set(keys) - CATEGORY_KEYS)
    if unknown:
        raise ValueError(f"unknown log categories: {', '.join(unknown)}")


def _normalize_channel_id(value: Any) -> Optional[str]:
    """Channel ids are kept as strings. Empty means not set."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("channel id must be a Discord snowflake")
    text = str(value).strip()
    if not text:
        return None
    if not text.isdigit():
        raise ValueError(f"invalid channel id: {text!r}")
    return text


# =============================================================================
# Request Models
# =============================================================================

class GuildConfigPayload(BaseModel):
    """
    Body of POST /api/guild/{guild_id}/config.

    Extra keys (including guildId) are dropped; the path decides the guild.
    """

    model_config = ConfigDict(extra="ignore")

    logs: Dict[str, bool] = Field(default_factory=dict)
    logChannels: Dict[str, Optional[str]] = Field(default_factory=dict)
    logChannelId: Optional[str] = None

    @field_validator("logs")
    @classmethod
    def validate_logs(cls, v: Dict[str, bool]) -> Dict[str, bool]:
        _check_categories(v)
        return v

    @field_validator("logChannels", mode="before")
    @classmethod
    def validate_log_channels(cls, v: Any) -> Dict[str, Optional[str]]:
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("logChannels must be an object")
        _check_categories(v)
        return {key: _normalize_channel_id(value) for key, value in v.items()}

    @field_validator("logChannelId", mode="before")
    @classmethod
    def validate_log_channel_id(cls, v: Any) -> Optional[str]:
        return _normalize_channel_id(v)


# =============================================================================
# Response Models
# =============================================================================

class GuildConfigView(BaseModel):
    """A stored guild config as the dashboard sees it."""

    guildId: str
    logs: Dict[str, bool] = Field(default_factory=dict)
    logChannels: Dict[str, Optional[str]] = Field(default_factory=dict)
    logChannelId: Optional[str] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: GuildConfigRecord) -> "GuildConfigView":
        updated_at = record.get("updated_at")
        return cls(
            guildId=record["guild_id"],
            logs=record.get("logs") or {},
            logChannels=record.get("log_channels") or {},
            logChannelId=record.get("log_channel_id"),
            updatedAt=datetime.fromtimestamp(updated_at, tz=timezone.utc) if updated_at else None,
        )

    @classmethod
    def empty(cls, guild_id: str) -> "GuildConfigView":
        return cls(guildId=guild_id)


class GuildConfigSaved(BaseModel):
    """Response of a successful save."""

    success: bool = True
    config: GuildConfigView


class LogCategoryInfo(BaseModel):
    key: str
    description: str


class UserGuild(BaseModel):
    """An administered guild and whether it has a saved config."""

    id: str
    name: str
    icon: Optional[str] = None
    configured: bool = False


__all__ = ["GuildConfigPayload", "GuildConfigView", "GuildConfigSaved", "LogCategoryInfo", "UserGuild"]
