"""
GuildLog - Configuration Module
===============================

Bot configuration loaded from environment variables.

DESIGN:
    Values are read once at startup. Required variables are validated
    together so a misconfigured deployment reports every missing value
    in one error instead of failing one variable at a time.

    - get_config() returns a process-wide Config instance
    - Numeric settings fall back to defaults with a warning when invalid
    - EmbedColors keeps every notification colour in one place
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Set

from guildlog.core.constants import (
    AUDIT_LOOKUP_LIMIT,
    AUDIT_LOOKUP_LIMIT_MAX,
    CACHE_TTL,
    CACHE_TTL_MAX,
)


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class Config:
    """
    Bot configuration.

    Attributes:
        discord_token: Bot authentication token.
        database_path: SQLite file holding guild log configs.
        config_cache_ttl: Seconds a guild config stays cached.
        audit_lookup_limit: Audit entries scanned per actor lookup.
        ignored_bot_ids: Users whose message events are never logged.
        error_webhook_url: Discord webhook for error alerts.
    """

    # -------------------------------------------------------------------------
    # Required
    # -------------------------------------------------------------------------

    discord_token: str

    # -------------------------------------------------------------------------
    # Optional
    # -------------------------------------------------------------------------

    database_path: Path = Path("data") / "guildlog.db"
    config_cache_ttl: int = CACHE_TTL
    audit_lookup_limit: int = AUDIT_LOOKUP_LIMIT
    ignored_bot_ids: Set[int] = field(default_factory=set)
    error_webhook_url: Optional[str] = None


# =============================================================================
# Embed Colors
# =============================================================================

class EmbedColors:
    """Notification colours, one per event type."""

    # Members
    MEMBER_JOIN = 0x00FF00
    MEMBER_LEAVE = 0xFF0000
    MEMBER_UPDATE = 0x20B2AA
    BAN_ADD = 0x8B0000
    BAN_REMOVE = 0x32CD32

    # Channels
    CHANNEL_CREATE = 0x00BFFF
    CHANNEL_DELETE = 0x1E90FF
    THREAD_CREATE = 0x00CED1
    THREAD_DELETE = 0xDC143C

    # Roles
    ROLE_CREATE = 0x8A2BE2
    ROLE_DELETE = 0x9932CC
    ROLE_UPDATE = 0xFFD700

    # Invites
    INVITE_CREATE = 0x32CD32
    INVITE_DELETE = 0xDC143C

    # Emojis
    EMOJI_CREATE = 0xFFD700
    EMOJI_DELETE = 0xFF6347

    # Messages
    MESSAGE_DELETE = 0xFF0000
    MESSAGE_EDIT = 0xFFA500
    REACTION_ADD = 0xFFD700
    REACTION_REMOVE = 0xFF6347

    # Voice
    VOICE = 0x00CED1


# =============================================================================
# Validation Helpers
# =============================================================================

class ConfigValidationError(Exception):
    """Raised when required configuration is missing or invalid."""


def _parse_int_set(value: Optional[str]) -> Set[int]:
    """Parse "1, 2,3" into {1, 2, 3}, skipping non-numeric entries."""
    if not value:
        return set()
    result = set()
    for part in value.split(","):
        part = part.strip()
        if part.isdigit():
            result.add(int(part))
    return result


def _parse_int_with_default(
    value: Optional[str],
    default: int,
    name: str,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
) -> int:
    """
    Parse an integer setting, falling back to the default when invalid.

    Args:
        value: Raw environment value.
        default: Value used when unset or invalid.
        name: Variable name for the warning.
        min_val: Inclusive lower bound.
        max_val: Inclusive upper bound.
    """
    if not value:
        return default
    try:
        result = int(value)
    except ValueError:
        result = None

    if result is None or (min_val is not None and result < min_val) or (max_val is not None and result > max_val):
        from guildlog.core.logger import logger
        logger.warning(f"Config {name}='{value}' invalid, using default {default}")
        return default
    return result


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    if not value:
        return None
    if not value.startswith(("https://", "http://")):
        from guildlog.core.logger import logger
        logger.warning(f"Config {name} invalid URL format, ignoring")
        return None
    return value


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Load configuration from the environment.

    Raises:
        ConfigValidationError: If a required variable is missing.
    """
    missing = []

    discord_token = os.getenv("DISCORD_TOKEN")
    if not discord_token:
        missing.append("DISCORD_TOKEN")

    if missing:
        raise ConfigValidationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    database_path = os.getenv("DATABASE_PATH")

    return Config(
        discord_token=discord_token,
        database_path=Path(database_path) if database_path else Path("data") / "guildlog.db",
        config_cache_ttl=_parse_int_with_default(
            os.getenv("CONFIG_CACHE_TTL"), CACHE_TTL, "CONFIG_CACHE_TTL", min_val=1, max_val=CACHE_TTL_MAX
        ),
        audit_lookup_limit=_parse_int_with_default(
            os.getenv("AUDIT_LOOKUP_LIMIT"), AUDIT_LOOKUP_LIMIT, "AUDIT_LOOKUP_LIMIT",
            min_val=1, max_val=AUDIT_LOOKUP_LIMIT_MAX,
        ),
        ignored_bot_ids=_parse_int_set(os.getenv("IGNORED_BOT_IDS")),
        error_webhook_url=_validate_url(os.getenv("ERROR_WEBHOOK_URL"), "ERROR_WEBHOOK_URL"),
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """Return the process-wide Config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def validate_and_log_config() -> None:
    """
    Load the config and log a startup summary.

    Raises:
        ConfigValidationError: If required configuration is missing.
    """
    from guildlog.core.logger import logger

    config = get_config()

    if not config.error_webhook_url:
        logger.info("Optional config not set: ERROR_WEBHOOK_URL")

    logger.tree("Configuration Validated", [
        ("Required", "✅ All required variables set"),
        ("Database", str(config.database_path)),
        ("Cache TTL", f"{config.config_cache_ttl}s"),
        ("Audit Lookup", f"{config.audit_lookup_limit} entries"),
        ("Ignored Bots", str(len(config.ignored_bot_ids))),
    ], emoji="⚙️")


__all__ = [
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "get_config",
    "load_config",
    "validate_and_log_config",
]
