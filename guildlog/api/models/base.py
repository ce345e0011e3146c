"""
GuildLog - Base API Models
==========================

Common response models.
"""

from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Base Response Models
# =============================================================================

class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    error: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class SystemHealth(BaseModel):
    """Detailed health snapshot."""

    status: str = Field(description="healthy or degraded")
    uptime_seconds: int
    memory_mb: float
    cpu_percent: float
    discord_connected: bool
    discord_latency_ms: int
    guilds_connected: int
    db_connected: bool
    db_size_mb: Optional[float] = None
    cached_configs: int = 0


__all__ = ["APIResponse", "SystemHealth"]
