"""
Server Logs Service Package
===========================

Routes guild events to per-category log channels configured per guild.

Structure:
    - categories.py: LogCategory enum
    - models.py: GuildLogConfig snapshot
    - store.py: async adapter over the database
    - cache.py: GuildConfigCache (TTL, misses not cached)
    - router.py: LogRouter (enabled? which channel?)
    - audit.py: AuditResolver (who did it, never raises)
    - service.py: LoggingService.dispatch pipeline
    - handlers/: per-event formatters
"""

from .audit import AuditResolver, AuditResult
from .cache import GuildConfigCache, StoreUnavailable
from .categories import LogCategory, CATEGORY_DESCRIPTIONS, CATEGORY_KEYS
from .models import GuildLogConfig
from .router import LogRouter
from .service import LoggingService
from .store import GuildConfigStore

__all__ = [
    "AuditResolver",
    "AuditResult",
    "GuildConfigCache",
    "StoreUnavailable",
    "LogCategory",
    "CATEGORY_DESCRIPTIONS",
    "CATEGORY_KEYS",
    "GuildLogConfig",
    "LogRouter",
    "LoggingService",
    "GuildConfigStore",
]
