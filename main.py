#!/usr/bin/env python3
"""
GuildLog - Entry Point
======================

Starts the Discord bot and its dashboard API.

Environment is loaded from .env; see guildlog/core/config.py and
guildlog/api/config.py for the variables read.
"""

import asyncio
import sys

from dotenv import load_dotenv

from guildlog import __version__
from guildlog.core.config import ConfigValidationError, get_config, validate_and_log_config
from guildlog.core.logger import logger
from guildlog.utils.error_handler import ErrorHandler


async def main() -> None:
    """
    Run the bot until it disconnects.

    Raises:
        SystemExit: If configuration is invalid or the bot fails to start.
    """
    load_dotenv()

    logger.tree("GUILDLOG STARTING", [
        ("Version", __version__),
        ("Python", sys.version.split()[0]),
    ], emoji="📋")

    try:
        validate_and_log_config()
    except ConfigValidationError as e:
        ErrorHandler.handle(e, location="main.main", critical=False)
        sys.exit(1)

    from guildlog.bot import GuildLogBot

    config = get_config()
    try:
        bot = GuildLogBot()
        async with bot:
            await bot.start(config.discord_token)
    except Exception as e:
        ErrorHandler.handle(
            e,
            location="main.main",
            critical=True,
            token_present=bool(config.discord_token),
        )
        sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (Ctrl+C)")
