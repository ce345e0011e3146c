"""
GuildLog - Guild Log Config Model
=================================

Immutable snapshot of one guild's logging configuration.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from guildlog.core.database.models import GuildConfigRecord
from guildlog.services.server_logs.categories import CATEGORY_KEYS, LogCategory


def _parse_snowflake(value: Any) -> Optional[int]:
    """Parse a stored channel id. Empty or malformed values mean "not set"."""
    if value is None:
        return None
    text = str(value).strip()
    if not text.isdigit():
        return None
    return int(text)


@dataclass(frozen=True)
class GuildLogConfig:
    """
    Logging configuration for one guild.

    Instances are never mutated. The cache replaces whole snapshots, so a
    handler holding one always sees a consistent view.

    Attributes:
        guild_id: Guild the config belongs to.
        logs_enabled: Category key to enabled flag.
        log_channels: Category key to destination channel id.
        default_log_channel: Fallback destination for categories with no channel.
        updated_at: Unix time of the last dashboard save.
    """

    guild_id: int
    logs_enabled: Mapping[str, bool] = field(default_factory=dict)
    log_channels: Mapping[str, int] = field(default_factory=dict)
    default_log_channel: Optional[int] = None
    updated_at: Optional[float] = None

    @classmethod
    def from_record(cls, record: GuildConfigRecord) -> "GuildLogConfig":
        """Build a snapshot from a store record, ignoring unknown categories."""
        logs = record.get("logs") or {}
        channels = record.get("log_channels") or {}

        logs_enabled = {
            key: value is True
            for key, value in logs.items()
            if key in CATEGORY_KEYS
        }
        log_channels = {}
        for key, value in channels.items():
            channel_id = _parse_snowflake(value)
            if key in CATEGORY_KEYS and channel_id is not None:
                log_channels[key] = channel_id

        return cls(
            guild_id=int(record["guild_id"]),
            logs_enabled=MappingProxyType(logs_enabled),
            log_channels=MappingProxyType(log_channels),
            default_log_channel=_parse_snowflake(record.get("log_channel_id")),
            updated_at=record.get("updated_at"),
        )

    def to_record(self) -> GuildConfigRecord:
        return GuildConfigRecord(
            guild_id=str(self.guild_id),
            logs=dict(self.logs_enabled),
            log_channels={k: str(v) for k, v in self.log_channels.items()},
            log_channel_id=str(self.default_log_channel) if self.default_log_channel else None,
            updated_at=self.updated_at,
        )

    def is_enabled(self, category: LogCategory) -> bool:
        return self.logs_enabled.get(category.value) is True

    def channel_id_for(self, category: LogCategory) -> Optional[int]:
        """Per-category channel if set, otherwise the default fallback."""
        return self.log_channels.get(category.value) or self.default_log_channel
