"""
GuildLog - API Package
======================

FastAPI dashboard for per-guild log configuration.

Usage with bot:
    from guildlog.api import APIService

    api_service = APIService(bot)
    await api_service.start()

    # On shutdown
    await api_service.stop()
"""

import asyncio
from typing import TYPE_CHECKING, Optional

import uvicorn

if TYPE_CHECKING:
    from guildlog.bot import GuildLogBot

from guildlog.core.logger import logger
from guildlog.utils.async_utils import create_safe_task
from guildlog.api.config import get_api_config, APIConfig
from guildlog.api.app import create_app
from guildlog.api.dependencies import set_bot


# =============================================================================
# API Service
# =============================================================================

class APIService:
    """
    Runs the FastAPI server in a background task of the bot's event loop.
    """

    def __init__(self, bot: "GuildLogBot") -> None:
        self._bot = bot
        self._config = get_api_config()
        self._app = create_app(bot)
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the API server in a background task."""
        if self.is_running:
            logger.warning("API Already Running", [])
            return

        config = uvicorn.Config(
            app=self._app,
            host=self._config.host,
            port=self._config.port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)
        self._task = create_safe_task(self._server.serve(), "API Server")

        logger.tree("API Service Started", [
            ("Host", self._config.host),
            ("Port", str(self._config.port)),
            ("OAuth", "Configured" if self._config.oauth_configured else "Missing credentials"),
            ("Debug", str(self._config.debug)),
        ], emoji="🌐")

    async def stop(self) -> None:
        """Stop the API server gracefully."""
        if not self.is_running:
            return

        logger.tree("API Service Stopping", [], emoji="🛑")

        if self._server:
            self._server.should_exit = True

        if self._task:
            try:
                await asyncio.wait_for(self._task, timeout=5.0)
            except asyncio.TimeoutError:
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass

        self._server = None
        self._task = None
        set_bot(None)

        logger.tree("API Service Stopped", [], emoji="✅")


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "APIService",
    "APIConfig",
    "get_api_config",
    "create_app",
    "set_bot",
]
