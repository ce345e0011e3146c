"""
GuildLog - API Configuration
============================

Configuration for the dashboard API, read from the environment.
"""

import os
import secrets
from dataclasses import dataclass
from typing import Optional, Tuple

from guildlog.core.logger import logger


@dataclass(frozen=True)
class APIConfig:
    """Dashboard API configuration settings."""

    # Server
    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False

    # CORS
    cors_origins: Tuple[str, ...] = ("*",)

    # Discord OAuth2
    client_id: str = ""
    client_secret: str = ""
    callback_url: str = "http://localhost:8080/auth/discord/callback"
    oauth_scopes: Tuple[str, ...] = ("identify", "guilds")

    # Session (JWT)
    session_secret: str = ""
    session_algorithm: str = "HS256"
    session_expiry_hours: int = 24

    @property
    def oauth_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_api_config() -> APIConfig:
    """Load API configuration from environment."""
    session_secret = os.getenv("SESSION_SECRET", "")
    if not session_secret:
        # Sessions will not survive a restart
        session_secret = secrets.token_urlsafe(32)
        logger.warning("SESSION_SECRET Not Set", [
            ("Effect", "Random secret generated for this run"),
        ])

    try:
        port = int(os.getenv("GUILDLOG_API_PORT", "8080"))
    except ValueError:
        logger.warning("Invalid GUILDLOG_API_PORT", [("Using", "8080")])
        port = 8080

    try:
        expiry_hours = max(1, int(os.getenv("SESSION_EXPIRY_HOURS", "24")))
    except ValueError:
        logger.warning("Invalid SESSION_EXPIRY_HOURS", [("Using", "24")])
        expiry_hours = 24

    origins = tuple(
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ) or ("*",)

    return APIConfig(
        enabled=_env_bool("GUILDLOG_API_ENABLED", True),
        host=os.getenv("GUILDLOG_API_HOST", "0.0.0.0"),
        port=port,
        debug=_env_bool("GUILDLOG_API_DEBUG", False),
        cors_origins=origins,
        client_id=os.getenv("DISCORD_CLIENT_ID", ""),
        client_secret=os.getenv("DISCORD_CLIENT_SECRET", ""),
        callback_url=os.getenv("DISCORD_CALLBACK_URL", APIConfig.callback_url),
        session_secret=session_secret,
        session_expiry_hours=expiry_hours,
    )


# Singleton instance
_config: Optional[APIConfig] = None


def get_api_config() -> APIConfig:
    """Get the API configuration singleton."""
    global _config
    if _config is None:
        _config = load_api_config()
    return _config


def set_api_config(config: Optional[APIConfig]) -> None:
    """Replace the singleton. None reloads from the environment on next use."""
    global _config
    _config = config


__all__ = ["APIConfig", "get_api_config", "load_api_config", "set_api_config"]
