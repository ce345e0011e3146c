"""
GuildLog - Logger Module
========================

Tree-style console and file logging for the bot and the dashboard.

DESIGN:
    Every log call prints a timestamped line and appends it to a dated
    log file. Structured context is passed as (key, value) tuples and
    rendered as a tree so one event stays readable on one screen.

    - Daily log folders under logs/YYYY-MM-DD with 7-day retention
    - Separate errors file for quick triage
    - Run ID in the session header to correlate restarts
    - Optional Discord webhook for error alerts
"""

import asyncio
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import aiohttp
from zoneinfo import ZoneInfo


# =============================================================================
# Constants
# =============================================================================

LOGS_DIR = Path("logs")
"""Root directory for dated log folders."""

LOG_RETENTION_DAYS = 7
"""Dated folders older than this are removed on startup."""

LOG_TZ = ZoneInfo("America/New_York")

Details = List[Tuple[str, str]]


# =============================================================================
# Tree Logger
# =============================================================================

class TreeLogger:
    """
    Logger that renders structured context as a tree.

    Attributes:
        run_id: Short identifier for this process.
        log_file: Path of today's main log file.
        error_file: Path of today's error log file.
    """

    def __init__(self, name: str = "GuildLog") -> None:
        self.run_id: str = uuid.uuid4().hex[:8]
        self._name = name
        self._webhook_url: Optional[str] = None

        today = datetime.now(LOG_TZ).strftime("%Y-%m-%d")
        self.log_dir = LOGS_DIR / today
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / f"{name}-{today}.log"
        self.error_file = self.log_dir / f"{name}-Errors-{today}.log"

        self._cleanup_old_logs()
        self._write_session_header()

    def set_webhook(self, url: Optional[str]) -> None:
        """Route future errors with details to a Discord webhook."""
        self._webhook_url = url

    # =========================================================================
    # Housekeeping
    # =========================================================================

    def _cleanup_old_logs(self) -> None:
        """Delete dated log folders past the retention window."""
        if not LOGS_DIR.exists():
            return

        now = datetime.now()
        removed = 0

        for folder in LOGS_DIR.iterdir():
            if not folder.is_dir():
                continue
            try:
                folder_date = datetime.strptime(folder.name, "%Y-%m-%d")
            except ValueError:
                continue
            if (now - folder_date).days <= LOG_RETENTION_DAYS:
                continue
            for item in folder.iterdir():
                item.unlink()
            folder.rmdir()
            removed += 1

        if removed:
            print(f"[LOG CLEANUP] Removed {removed} old log folders")

    def _write_session_header(self) -> None:
        started = datetime.now(LOG_TZ).strftime("%I:%M:%S %p %Z")
        header = (
            "\n" + "=" * 60 + "\n"
            f"SESSION START - {self._name} - RUN ID: {self.run_id}\n"
            f"[{started}]\n"
            + "=" * 60 + "\n"
        )
        self._append(self.log_file, header)

    # =========================================================================
    # Output
    # =========================================================================

    @staticmethod
    def _append(path: Path, text: str) -> None:
        with open(path, "a", encoding="utf-8") as f:
            f.write(text)

    def _timestamp(self) -> str:
        return datetime.now(LOG_TZ).strftime("[%I:%M:%S %p %Z]")

    def _write(
        self,
        message: str,
        emoji: str = "",
        include_timestamp: bool = True,
        is_error: bool = False,
    ) -> None:
        """Print a line and append it to the main (and error) log."""
        parts = []
        if include_timestamp:
            parts.append(self._timestamp())
        if emoji:
            parts.append(emoji)
        parts.append(message)
        line = " ".join(part for part in parts if part)

        print(line)
        self._append(self.log_file, f"{line}\n")
        if is_error:
            self._append(self.error_file, f"{line}\n")

    def _write_items(self, items: Details, is_error: bool = False) -> None:
        for i, (key, value) in enumerate(items):
            branch = "└─" if i == len(items) - 1 else "├─"
            self._write(f"  {branch} {key}: {value}", include_timestamp=False, is_error=is_error)

    # =========================================================================
    # Public API
    # =========================================================================

    def tree(self, title: str, items: Details, emoji: str = "📦") -> None:
        """
        Log a titled block of key/value context.

        Example output:
            [02:30:45 PM EST] 📋 Log Routed
              ├─ Guild: 1234
              └─ Category: members
        """
        self._append(self.log_file, "\n")
        self._write(title, emoji=emoji)
        self._write_items(items)
        self._append(self.log_file, "\n")

    def debug(self, msg: str, details: Optional[Details] = None) -> None:
        """Log only when the DEBUG environment variable is set."""
        if not os.getenv("DEBUG"):
            return
        self._write(msg, "🔍")
        if details:
            self._write_items(details)

    def info(self, msg: str) -> None:
        self._write(msg, "ℹ️")

    def success(self, msg: str) -> None:
        self._write(msg, "✅")

    def warning(self, msg: str, details: Optional[Details] = None) -> None:
        self._write(msg, "⚠️")
        if details:
            self._write_items(details)

    def error(self, msg: str, details: Optional[Details] = None) -> None:
        """
        Log an error to both files.

        Errors that carry details are also posted to the webhook when one
        is configured and an event loop is running.
        """
        if not details:
            self._write(msg, "❌", is_error=True)
            return

        self._write("", include_timestamp=False, is_error=True)
        self._write(msg, "❌", is_error=True)
        self._write_items(details, is_error=True)
        self._write("", include_timestamp=False, is_error=True)

        if self._webhook_url:
            try:
                asyncio.get_running_loop().create_task(self._send_webhook_error(msg, details))
            except RuntimeError:
                pass  # No running loop (startup or shutdown)

    def critical(self, msg: str) -> None:
        self._write(msg, "🚨", is_error=True)

    # =========================================================================
    # Webhook
    # =========================================================================

    async def _send_webhook_error(self, title: str, details: Details) -> None:
        """Post an error embed to the configured webhook."""
        if not self._webhook_url:
            return

        payload = {
            "embeds": [{
                "title": f"❌ {title}",
                "description": "\n".join(f"**{k}:** {v}" for k, v in details),
                "color": 0xFF0000,
                "timestamp": datetime.now(LOG_TZ).isoformat(),
                "footer": {"text": f"{self._name} • Run ID: {self.run_id}"},
            }]
        }

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self._webhook_url,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=10),
                ) as resp:
                    if resp.status not in (200, 204):
                        print(f"Error webhook returned {resp.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            print(f"Error webhook failed: {e}")


# =============================================================================
# Global Instance
# =============================================================================

logger = TreeLogger()


__all__ = [
    "logger",
    "TreeLogger",
    "LOG_TZ",
]
