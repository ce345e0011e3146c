"""
GuildLog - API Services
=======================
"""

from .auth import SessionService, get_session_service
from .oauth import DiscordOAuthClient, OAuthError, get_oauth_client

__all__ = [
    "SessionService",
    "get_session_service",
    "DiscordOAuthClient",
    "OAuthError",
    "get_oauth_client",
]
