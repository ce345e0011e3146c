"""
GuildLog - Error Handler
========================

Categorised error logging for failures outside the event pipeline
(startup, shutdown, API server).

Features:
- Error categorisation (discord, network, database, config)
- Recovery suggestion per category
- Critical errors saved as JSON under logs/errors/
"""

import json
import sqlite3
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Tuple, Type

import aiohttp
import discord

from guildlog.core.config import ConfigValidationError
from guildlog.core.logger import logger


ERROR_DIR = Path("logs") / "errors"


class ErrorHandler:
    """Error handling with context and recovery hints."""

    ERROR_CATEGORIES: Dict[str, Tuple[Type[BaseException], ...]] = {
        "config": (ConfigValidationError,),
        "discord": (discord.LoginFailure, discord.Forbidden, discord.NotFound, discord.HTTPException),
        "database": (sqlite3.Error,),
        "network": (aiohttp.ClientError, ConnectionError, TimeoutError),
    }

    SUGGESTIONS: Dict[str, str] = {
        "config": "Check the .env file against the required variables",
        "discord": "Check the bot token and its permissions in the server",
        "database": "Check DATABASE_PATH is writable and not locked",
        "network": "Network issue - check connectivity to Discord",
    }

    @classmethod
    def categorize_error(cls, e: BaseException) -> str:
        for category, error_types in cls.ERROR_CATEGORIES.items():
            if isinstance(e, error_types):
                return category
        return "general"

    @classmethod
    def get_recovery_suggestion(cls, category: str) -> str:
        return cls.SUGGESTIONS.get(category, "Unexpected error - check logs for details")

    @classmethod
    def handle(cls, e: BaseException, location: str, critical: bool = False, **context: Any) -> str:
        """
        Log an error with its category and a recovery hint.

        Args:
            e: The exception.
            location: Where the error occurred, e.g. "main.main".
            critical: Save full context to disk and log the traceback.
            **context: Extra key/value context for the log entry.

        Returns:
            The error category.
        """
        category = cls.categorize_error(e)
        details = [
            ("Location", location),
            ("Category", category.upper()),
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:200]),
            ("Recovery", cls.get_recovery_suggestion(category)),
        ]
        details.extend((key.replace("_", " ").title(), str(value)[:100]) for key, value in context.items())

        if critical:
            logger.error("CRITICAL ERROR", details)
            logger.debug("Traceback", [("Trace", "".join(traceback.format_exception(e))[-1000:])])
            cls._store_critical_error(e, location, category, context)
        else:
            logger.warning("Error Handled", details)

        return category

    @staticmethod
    def _store_critical_error(
        e: BaseException,
        location: str,
        category: str,
        context: Dict[str, Any],
    ) -> None:
        payload = {
            "timestamp": datetime.now().isoformat(),
            "location": location,
            "category": category,
            "error_type": type(e).__name__,
            "error_message": str(e),
            "traceback": "".join(traceback.format_exception(e)),
            "python_version": sys.version,
            "context": context,
        }

        try:
            ERROR_DIR.mkdir(parents=True, exist_ok=True)
            error_file = ERROR_DIR / f"error_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
            with open(error_file, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, default=str)
            logger.info(f"Critical Error Saved: {error_file}")
        except OSError as save_error:
            logger.warning("Failed To Save Error Details", [("Error", str(save_error))])


__all__ = ["ErrorHandler", "ERROR_DIR"]
