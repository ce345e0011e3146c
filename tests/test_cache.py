"""
GuildLog - Guild Config Cache Tests
===================================
"""

import pytest

from guildlog.services.server_logs import GuildConfigCache, StoreUnavailable

GUILD_ID = 987654321


@pytest.fixture
def cache(fake_store, fake_clock):
    return GuildConfigCache(fake_store, ttl=300, clock=fake_clock)


class TestCacheHits:
    """Tests for fresh entries."""

    @pytest.mark.asyncio
    async def test_second_get_is_served_from_cache(self, cache, fake_store, make_config):
        """Test an unexpired entry is returned without touching the store."""
        fake_store.configs[GUILD_ID] = make_config(logs={"members": True})

        first = await cache.get(GUILD_ID)
        second = await cache.get(GUILD_ID)

        assert first is second
        assert fake_store.calls == 1

    @pytest.mark.asyncio
    async def test_entry_fresh_just_before_ttl(self, cache, fake_store, fake_clock, make_config):
        """Test an entry one tick before expiry is still a hit."""
        fake_store.configs[GUILD_ID] = make_config()
        await cache.get(GUILD_ID)

        fake_clock.advance(299.999)
        await cache.get(GUILD_ID)

        assert fake_store.calls == 1


class TestCacheExpiry:
    """Tests for expired entries."""

    @pytest.mark.asyncio
    async def test_expired_entry_is_refetched(self, cache, fake_store, fake_clock, make_config):
        """Test an entry is refetched once the TTL has elapsed."""
        fake_store.configs[GUILD_ID] = make_config(logs={"members": True})
        await cache.get(GUILD_ID)

        updated = make_config(logs={"members": False})
        fake_store.configs[GUILD_ID] = updated
        fake_clock.advance(300)

        assert await cache.get(GUILD_ID) is updated
        assert fake_store.calls == 2

    @pytest.mark.asyncio
    async def test_store_write_invisible_until_expiry(self, cache, fake_store, fake_clock, make_config):
        """Test a store change is not observed before the TTL elapses."""
        original = make_config(logs={"members": True})
        fake_store.configs[GUILD_ID] = original
        await cache.get(GUILD_ID)

        fake_store.configs[GUILD_ID] = make_config(logs={"members": False})
        fake_clock.advance(120)

        assert await cache.get(GUILD_ID) is original

    @pytest.mark.asyncio
    async def test_cleanup_expired(self, cache, fake_store, fake_clock, make_config):
        """Test cleanup removes only expired entries."""
        fake_store.configs[1] = make_config(guild_id=1)
        fake_store.configs[2] = make_config(guild_id=2)
        await cache.get(1)
        fake_clock.advance(200)
        await cache.get(2)
        fake_clock.advance(150)

        assert cache.cleanup_expired() == 1
        assert 1 not in cache
        assert 2 in cache
        assert len(cache) == 1


class TestCacheMisses:
    """Tests for guilds with no config."""

    @pytest.mark.asyncio
    async def test_miss_is_not_cached(self, cache, fake_store):
        """Test an absent config is asked for again on every lookup."""
        assert await cache.get(GUILD_ID) is None
        assert await cache.get(GUILD_ID) is None

        assert fake_store.calls == 2
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_first_save_visible_immediately(self, cache, fake_store, make_config):
        """Test a guild's first config is seen on the next lookup."""
        assert await cache.get(GUILD_ID) is None

        config = make_config(logs={"members": True})
        fake_store.configs[GUILD_ID] = config

        assert await cache.get(GUILD_ID) is config


class TestCacheStoreFailure:
    """Tests for store errors."""

    @pytest.mark.asyncio
    async def test_store_error_raises_store_unavailable(self, cache, fake_store):
        """Test a store exception surfaces as StoreUnavailable with its cause."""
        fake_store.error = RuntimeError("database is locked")

        with pytest.raises(StoreUnavailable) as exc_info:
            await cache.get(GUILD_ID)

        assert exc_info.value.guild_id == GUILD_ID
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert GUILD_ID not in cache

    @pytest.mark.asyncio
    async def test_recovers_after_store_error(self, cache, fake_store, make_config):
        """Test nothing is cached by a failure, so the next call retries."""
        fake_store.error = RuntimeError("boom")
        with pytest.raises(StoreUnavailable):
            await cache.get(GUILD_ID)

        fake_store.error = None
        fake_store.configs[GUILD_ID] = make_config()

        assert await cache.get(GUILD_ID) is not None
        assert fake_store.calls == 2


class TestCacheHelpers:
    """Tests for invalidate and clear."""

    @pytest.mark.asyncio
    async def test_invalidate(self, cache, fake_store, make_config):
        fake_store.configs[GUILD_ID] = make_config()
        await cache.get(GUILD_ID)

        assert cache.invalidate(GUILD_ID) is True
        assert cache.invalidate(GUILD_ID) is False

        await cache.get(GUILD_ID)
        assert fake_store.calls == 2

    @pytest.mark.asyncio
    async def test_clear(self, cache, fake_store, make_config):
        fake_store.configs[GUILD_ID] = make_config()
        await cache.get(GUILD_ID)

        cache.clear()

        assert len(cache) == 0
