"""
GuildLog - API Dependencies
===========================

FastAPI dependency injection utilities.
"""

from typing import TYPE_CHECKING, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from guildlog.core.constants import SESSION_COOKIE_NAME
from guildlog.core.database import DatabaseManager, get_db
from guildlog.api.errors import APIError, ErrorCode
from guildlog.api.models.auth import GuildBrief, SessionPayload
from guildlog.api.services.auth import get_session_service

if TYPE_CHECKING:
    from guildlog.bot import GuildLogBot


# =============================================================================
# Security
# =============================================================================

security = HTTPBearer(auto_error=False)


# =============================================================================
# Bot Reference
# =============================================================================

_bot_instance: Optional["GuildLogBot"] = None


def set_bot(bot: Optional["GuildLogBot"]) -> None:
    """Set the bot instance for dependency injection."""
    global _bot_instance
    _bot_instance = bot


def get_bot() -> "GuildLogBot":
    """Get the bot instance."""
    if _bot_instance is None:
        raise APIError(ErrorCode.BOT_NOT_INITIALIZED)
    return _bot_instance


def get_database() -> DatabaseManager:
    """The bot's database when attached, else the process singleton."""
    if _bot_instance is not None and getattr(_bot_instance, "db", None) is not None:
        return _bot_instance.db
    return get_db()


# =============================================================================
# Authentication Dependencies
# =============================================================================

async def get_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[SessionPayload]:
    """
    Session from the Bearer header, else from the session cookie.
    Returns None if absent or invalid.
    """
    token = credentials.credentials if credentials else request.cookies.get(SESSION_COOKIE_NAME)
    return get_session_service().decode(token)


async def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> SessionPayload:
    """
    Require a valid session.
    Raises 401 if not authenticated.
    """
    token = credentials.credentials if credentials else request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        raise APIError(ErrorCode.AUTH_MISSING_TOKEN)

    payload = get_session_service().decode(token)
    if payload is None:
        raise APIError(ErrorCode.AUTH_INVALID_TOKEN)

    return payload


async def require_guild_admin(
    guild_id: str,
    session: SessionPayload = Depends(require_auth),
) -> GuildBrief:
    """
    Require ADMINISTRATOR in the guild named by the path.
    Raises 403 otherwise.
    """
    guild = session.find_guild(guild_id)
    if guild is None:
        raise APIError(ErrorCode.PERMISSION_DENIED, details={"guild_id": guild_id})
    return guild


__all__ = [
    "security",
    "set_bot",
    "get_bot",
    "get_database",
    "get_session",
    "require_auth",
    "require_guild_admin",
]
