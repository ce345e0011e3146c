"""
GuildLog - Main Bot Class
=========================

Discord client that posts guild audit events to per-category log
channels, and hosts the configuration dashboard.

Features:
- Per-guild, per-category log routing with a fallback channel
- Audit log lookups for who performed an action
- TTL cache over the guild config store
- FastAPI dashboard in the same process
"""

import asyncio
from datetime import datetime
from typing import Optional

import discord
from discord.ext import commands

from guildlog.core.config import get_config
from guildlog.core.database import get_db
from guildlog.core.logger import logger
from guildlog.services.server_logs import (
    AuditResolver,
    GuildConfigCache,
    GuildConfigStore,
    LoggingService,
    LogRouter,
)
from guildlog.utils.async_utils import create_safe_task


# =============================================================================
# GuildLogBot Class
# =============================================================================

class GuildLogBot(commands.Bot):
    """
    Main Discord bot class.

    DESIGN: Owns the logging pipeline and hands it to the event cogs.

    SERVICE INITIALIZATION ORDER:
    1. __init__:
       - Database, config store, cache, router, audit resolver
       - Logging service
    2. setup_hook (before on_ready):
       - Event cog loading
       - Dashboard API start
       - Cache cleanup loop
    3. on_ready:
       - Error webhook
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self) -> None:
        self.config = get_config()

        intents = discord.Intents.default()
        intents.members = True
        intents.message_content = True
        intents.guilds = True
        intents.voice_states = True
        intents.invites = True
        intents.emojis_and_stickers = True
        intents.guild_reactions = True
        intents.moderation = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
        )

        self.db = get_db(self.config.database_path)
        self.start_time: datetime = datetime.now()

        # Logging pipeline
        self.config_store = GuildConfigStore(self.db)
        self.config_cache = GuildConfigCache(self.config_store, ttl=self.config.config_cache_ttl)
        self.log_router = LogRouter(self.config_cache)
        self.audit_resolver = AuditResolver(self.config.audit_lookup_limit)
        self.logging_service = LoggingService(self.log_router, self.audit_resolver)

        # Service placeholders
        self.api_service = None
        self._cleanup_task: Optional[asyncio.Task] = None

        # Ready and shutdown guards
        self._ready_initialized: bool = False
        self._shutdown_started: bool = False

        logger.info("Bot Instance Created")

    # =========================================================================
    # Setup Hook
    # =========================================================================

    async def setup_hook(self) -> None:
        """Load event cogs and start the dashboard before on_ready."""
        from guildlog.events import EVENT_COGS
        for cog in EVENT_COGS:
            try:
                await self.load_extension(cog)
                logger.debug(f"Event Cog Loaded: {cog.split('.')[-1]}")
            except Exception as e:
                logger.error("Failed to Load Event Cog", [("Cog", cog), ("Error", str(e))])

        await self._start_api()

        self._cleanup_task = create_safe_task(self._cache_cleanup_loop(), "Config Cache Cleanup")

    async def _start_api(self) -> None:
        from guildlog.api import APIService
        from guildlog.api.config import get_api_config

        if not get_api_config().enabled:
            logger.info("Dashboard API Disabled")
            return

        try:
            self.api_service = APIService(self)
            await self.api_service.start()
        except Exception as e:
            logger.error("API Service Failed To Start", [
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:100]),
            ])
            self.api_service = None

    async def _cache_cleanup_loop(self) -> None:
        """Drop expired config snapshots so departed guilds do not linger."""
        await self.wait_until_ready()
        while not self.is_closed():
            await asyncio.sleep(self.config_cache.ttl)
            removed = self.config_cache.cleanup_expired()
            if removed:
                logger.debug("Config Cache Cleanup", [
                    ("Removed", str(removed)),
                    ("Remaining", str(len(self.config_cache))),
                ])

    # =========================================================================
    # On Ready
    # =========================================================================

    async def on_ready(self) -> None:
        if self._ready_initialized:
            logger.info("Bot Reconnected (skipping re-initialization)")
            return

        self._ready_initialized = True

        if not self.user:
            return

        if self.config.error_webhook_url:
            logger.set_webhook(self.config.error_webhook_url)

        configured = await asyncio.to_thread(
            self.db.get_configured_guild_ids,
            [g.id for g in self.guilds],
        )

        logger.tree("BOT ONLINE", [
            ("Name", self.user.name),
            ("ID", str(self.user.id)),
            ("Guilds", str(len(self.guilds))),
            ("Configured", str(len(configured))),
            ("Dashboard", "Running" if self.api_service and self.api_service.is_running else "Stopped"),
            ("Error Webhook", "Enabled" if self.config.error_webhook_url else "Disabled"),
        ], emoji="🚀")

    # =========================================================================
    # Shutdown
    # =========================================================================

    async def shutdown(self) -> None:
        """Graceful shutdown with proper cleanup. Runs once."""
        if self._shutdown_started:
            return
        self._shutdown_started = True

        logger.info("Initiating Graceful Shutdown")

        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()

        if self.api_service:
            await self.api_service.stop()

        self.db.close()
        await super().close()

        logger.tree("SHUTDOWN COMPLETE", [
            ("Uptime", str(datetime.now() - self.start_time)),
        ], emoji="🛑")

    async def close(self) -> None:
        """Override close to ensure proper shutdown."""
        await self.shutdown()


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["GuildLogBot"]
