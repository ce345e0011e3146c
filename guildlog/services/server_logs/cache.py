"""
GuildLog - Guild Config Cache
=============================

Read-through, time-expiring cache in front of the guild config store.

DESIGN:
    Found configs are cached for a fixed TTL. Absent configs are NOT
    cached: an unconfigured guild reads the store on every lookup until
    its first dashboard save, so a fresh save is never hidden behind a
    cached "absent".

    Expiry is lazy (checked on read). Entries are immutable snapshots
    replaced whole, so concurrent lookups can at worst fetch the same
    guild twice. Dashboard writes never touch the cache; they become
    visible once the current entry expires.
"""

import time
from typing import Callable, Dict, Optional, Protocol, Tuple

from guildlog.core.constants import CACHE_TTL
from guildlog.core.logger import logger
from guildlog.services.server_logs.models import GuildLogConfig


class StoreUnavailable(Exception):
    """The config store could not be read."""

    def __init__(self, guild_id: int, cause: BaseException) -> None:
        super().__init__(f"Config store unavailable for guild {guild_id}: {cause}")
        self.guild_id = guild_id
        self.cause = cause


class ConfigStore(Protocol):
    async def fetch(self, guild_id: int) -> Optional[GuildLogConfig]:
        ...


class GuildConfigCache:
    """
    Time-bounded cache of guild log configs.

    Args:
        store: Source of truth, queried on miss or expiry.
        ttl: Seconds an entry stays fresh after insertion.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        store: ConfigStore,
        ttl: float = CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._ttl = ttl
        self._clock = clock
        self._entries: Dict[int, Tuple[GuildLogConfig, float]] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    async def get(self, guild_id: int) -> Optional[GuildLogConfig]:
        """
        Return the guild's config, or None if it has none.

        Raises:
            StoreUnavailable: If the store raised while fetching.
        """
        entry = self._entries.get(guild_id)
        if entry is not None:
            config, cached_at = entry
            if self._clock() - cached_at < self._ttl:
                return config
            self._entries.pop(guild_id, None)

        try:
            config = await self._store.fetch(guild_id)
        except Exception as e:
            raise StoreUnavailable(guild_id, e) from e

        if config is not None:
            self._entries[guild_id] = (config, self._clock())
            logger.debug("Guild Config Cached", [
                ("Guild ID", str(guild_id)),
                ("TTL", f"{self._ttl}s"),
            ])
        return config

    def invalidate(self, guild_id: int) -> bool:
        """Drop one guild's entry. Returns True if it was cached."""
        return self._entries.pop(guild_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def cleanup_expired(self) -> int:
        """Remove expired entries. Returns how many were removed."""
        now = self._clock()
        expired = [
            guild_id for guild_id, (_, cached_at) in self._entries.items()
            if now - cached_at >= self._ttl
        ]
        for guild_id in expired:
            self._entries.pop(guild_id, None)
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, guild_id: int) -> bool:
        entry = self._entries.get(guild_id)
        return entry is not None and self._clock() - entry[1] < self._ttl
