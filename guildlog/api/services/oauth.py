"""
GuildLog - Discord OAuth2 Client
================================

Authorization-code flow against Discord (scopes: identify guilds).
"""

from typing import Any, List, Optional
from urllib.parse import urlencode

import aiohttp

from guildlog.core.constants import DISCORD_API_BASE
from guildlog.core.logger import logger
from guildlog.api.config import APIConfig, get_api_config
from guildlog.api.models.auth import DiscordGuild, DiscordUser


AUTHORIZE_URL = "https://discord.com/oauth2/authorize"
TOKEN_URL = f"{DISCORD_API_BASE}/oauth2/token"


class OAuthError(Exception):
    """Discord rejected the code or a follow-up call failed."""

    def __init__(self, step: str, status: Optional[int] = None, detail: str = "") -> None:
        self.step = step
        self.status = status
        super().__init__(f"{step} failed ({status}): {detail}"[:200])


class DiscordOAuthClient:
    """Thin aiohttp wrapper for the three calls the login needs."""

    def __init__(self, config: Optional[APIConfig] = None) -> None:
        self._config = config or get_api_config()
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create persistent HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=10))
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def authorize_url(self, state: str) -> str:
        query = urlencode({
            "client_id": self._config.client_id,
            "redirect_uri": self._config.callback_url,
            "response_type": "code",
            "scope": " ".join(self._config.oauth_scopes),
            "state": state,
            "prompt": "none",
        })
        return f"{AUTHORIZE_URL}?{query}"

    async def exchange_code(self, code: str) -> str:
        """Trade an authorization code for a user access token."""
        session = await self._get_session()
        data = {
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self._config.callback_url,
        }
        async with session.post(TOKEN_URL, data=data) as resp:
            if resp.status != 200:
                raise OAuthError("Token Exchange", resp.status, await resp.text())
            payload = await resp.json()

        access_token = payload.get("access_token")
        if not access_token:
            raise OAuthError("Token Exchange", resp.status, "no access_token in response")
        return access_token

    async def _get_json(self, path: str, access_token: str, step: str) -> Any:
        session = await self._get_session()
        headers = {"Authorization": f"Bearer {access_token}"}
        async with session.get(f"{DISCORD_API_BASE}{path}", headers=headers) as resp:
            if resp.status != 200:
                raise OAuthError(step, resp.status, await resp.text())
            return await resp.json()

    async def fetch_user(self, access_token: str) -> DiscordUser:
        return DiscordUser(**await self._get_json("/users/@me", access_token, "Fetch User"))

    async def fetch_guilds(self, access_token: str) -> List[DiscordGuild]:
        data = await self._get_json("/users/@me/guilds", access_token, "Fetch Guilds")
        guilds = []
        for raw in data:
            try:
                guilds.append(DiscordGuild(**raw))
            except (TypeError, ValueError) as e:
                logger.debug("Skipping Malformed Guild", [("Error", str(e)[:100])])
        return guilds


_oauth_client: Optional[DiscordOAuthClient] = None


def get_oauth_client() -> DiscordOAuthClient:
    """Get the OAuth client singleton."""
    global _oauth_client
    if _oauth_client is None:
        _oauth_client = DiscordOAuthClient()
    return _oauth_client


__all__ = ["DiscordOAuthClient", "OAuthError", "get_oauth_client", "AUTHORIZE_URL", "TOKEN_URL"]
