"""
GuildLog - API Routers
======================

Route handlers for the dashboard.
"""

from .health import router as health_router
from .auth import router as auth_router
from .guilds import router as guilds_router

__all__ = [
    "health_router",
    "auth_router",
    "guilds_router",
]
