"""
GuildLog - Session Service
==========================

Signed dashboard sessions (JWT via pyjwt).

DESIGN:
    The token carries the user id, username and the guilds the user
    administers, captured at login. Guild permission checks read the
    token only, so a user who loses ADMINISTRATOR keeps dashboard access
    to that guild until the session expires.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from guildlog.core.logger import logger
from guildlog.api.config import APIConfig, get_api_config
from guildlog.api.models.auth import DiscordGuild, DiscordUser, GuildBrief, SessionPayload


TOKEN_TYPE_SESSION = "session"


class SessionService:
    """Issues and verifies dashboard session tokens."""

    def __init__(self, config: Optional[APIConfig] = None) -> None:
        self._override = config

    @property
    def _config(self) -> APIConfig:
        return self._override or get_api_config()

    def issue(self, user: DiscordUser, guilds: List[DiscordGuild]) -> Tuple[str, datetime]:
        """
        Create a session token for a freshly authenticated user.

        Only guilds where the user holds ADMINISTRATOR are embedded.

        Returns:
            (token, expires_at)
        """
        now = datetime.now(timezone.utc)
        expires_at = now + timedelta(hours=self._config.session_expiry_hours)
        admin_guilds = [
            GuildBrief(id=g.id, name=g.name, icon=g.icon).model_dump()
            for g in guilds
            if g.is_admin
        ]

        payload = {
            "sub": str(user.id),
            "username": user.username,
            "guilds": admin_guilds,
            "iat": now,
            "exp": expires_at,
            "type": TOKEN_TYPE_SESSION,
        }
        token = jwt.encode(payload, self._config.session_secret, algorithm=self._config.session_algorithm)

        logger.tree("Dashboard Login", [
            ("User", f"{user.username} ({user.id})"),
            ("Admin Guilds", str(len(admin_guilds))),
            ("Expires", expires_at.isoformat()),
        ], emoji="🔐")

        return token, expires_at

    def decode(self, token: Optional[str]) -> Optional[SessionPayload]:
        """Verify a token. Returns None when missing, expired or invalid."""
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self._config.session_secret,
                algorithms=[self._config.session_algorithm],
            )
            if payload.get("type") != TOKEN_TYPE_SESSION:
                return None

            return SessionPayload(
                sub=int(payload["sub"]),
                username=payload.get("username", "Unknown"),
                guilds=payload.get("guilds", []),
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except ExpiredSignatureError:
            logger.debug("Session Expired")
            return None
        except (InvalidTokenError, KeyError, ValueError, TypeError):
            return None


_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get the session service singleton."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service


__all__ = ["SessionService", "get_session_service", "TOKEN_TYPE_SESSION"]
