"""
GuildLog - Constants
====================

Shared limits and defaults.
"""

# =============================================================================
# Config Cache
# =============================================================================

CACHE_TTL = 300
"""Seconds a guild config stays fresh in the cache (5 minutes)."""

CACHE_TTL_MAX = 3600


# =============================================================================
# Discord Limits
# =============================================================================

EMBED_FIELD_LIMIT = 1024
EMBED_DESCRIPTION_LIMIT = 2048


# =============================================================================
# Audit Log
# =============================================================================

AUDIT_LOOKUP_LIMIT = 5
"""Recent audit entries scanned when resolving who performed an action."""

AUDIT_LOOKUP_LIMIT_MAX = 50


# =============================================================================
# Database
# =============================================================================

DB_CONNECTION_TIMEOUT = 30.0
SQLITE_BUSY_TIMEOUT = 5000  # ms


# =============================================================================
# Dashboard
# =============================================================================

ADMINISTRATOR_PERMISSION = 0x8
SESSION_COOKIE_NAME = "guildlog_session"
DISCORD_API_BASE = "https://discord.com/api/v10"
