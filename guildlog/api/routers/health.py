"""
GuildLog - Health Router
========================

Health check and system status endpoints.
"""

import os
import time
from datetime import datetime, timezone
from typing import Optional

import psutil
from fastapi import APIRouter, Depends

from guildlog.core.logger import logger
from guildlog.api.dependencies import get_bot, get_database
from guildlog.api.models.base import APIResponse, SystemHealth


router = APIRouter(prefix="/health", tags=["Health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=APIResponse[dict])
async def health_check() -> APIResponse[dict]:
    """Basic health check for load balancers and monitoring."""
    return APIResponse(
        success=True,
        data={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


@router.get("/detailed", response_model=APIResponse[SystemHealth])
async def detailed_health(bot=Depends(get_bot)) -> APIResponse[SystemHealth]:
    """Discord connection, process and database status."""
    process = psutil.Process(os.getpid())
    memory_mb = process.memory_info().rss / (1024 * 1024)
    cpu_percent = process.cpu_percent(interval=None)

    discord_connected = bot.is_ready()
    latency = bot.latency
    discord_latency = int(latency * 1000) if latency and latency != float("inf") else 0

    db_connected = True
    db_size: Optional[float] = None
    try:
        db = get_database()
        db.fetchone("SELECT 1")
        if db.db_path.exists():
            db_size = db.db_path.stat().st_size / (1024 * 1024)
    except Exception as e:
        db_connected = False
        logger.warning("Health Check Database Unreachable", [("Error", str(e)[:100])])

    config_cache = getattr(bot, "config_cache", None)

    health = SystemHealth(
        status="healthy" if discord_connected and db_connected else "degraded",
        uptime_seconds=int(time.time() - _start_time),
        memory_mb=round(memory_mb, 2),
        cpu_percent=round(cpu_percent, 2),
        discord_connected=discord_connected,
        discord_latency_ms=discord_latency,
        guilds_connected=len(bot.guilds),
        db_connected=db_connected,
        db_size_mb=round(db_size, 2) if db_size is not None else None,
        cached_configs=len(config_cache) if config_cache is not None else 0,
    )

    logger.debug("Health Check (Detailed)", [
        ("Status", health.status),
        ("Memory", f"{health.memory_mb}MB"),
        ("Discord", "Connected" if discord_connected else "Disconnected"),
    ])

    return APIResponse(success=True, data=health)


__all__ = ["router"]
