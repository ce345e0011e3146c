"""
GuildLog - Test Fixtures
========================

Shared fixtures for all tests.
"""

import os
from typing import Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set up test environment before importing modules
os.environ["TESTING"] = "1"
os.environ.setdefault("DISCORD_TOKEN", "test-token")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

from guildlog.core import database as db_module
from guildlog.services.server_logs import AuditResolver, GuildLogConfig


GUILD_ID = 987654321


# =============================================================================
# Fakes
# =============================================================================

class FakeStore:
    """In-memory config store counting fetches."""

    def __init__(self) -> None:
        self.configs: Dict[int, GuildLogConfig] = {}
        self.error: Optional[Exception] = None
        self.calls = 0

    async def fetch(self, guild_id: int) -> Optional[GuildLogConfig]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.configs.get(guild_id)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


def audit_logs_from(entries_by_action: Dict, error: Optional[Exception] = None):
    """Build a side effect for guild.audit_logs(action=..., limit=...)."""

    def audit_logs(action=None, limit=None, **kwargs):
        async def gen():
            if error is not None:
                raise error
            for entry in entries_by_action.get(action, [])[:limit]:
                yield entry
        return gen()

    return audit_logs


def make_audit_entry(target_id: int, user=None, reason: Optional[str] = None, **extra):
    entry = MagicMock()
    entry.target = MagicMock()
    entry.target.id = target_id
    entry.user = user
    entry.reason = reason
    entry.extra = MagicMock(**extra) if extra else None
    return entry


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing."""
    return tmp_path / "test_guildlog.db"


@pytest.fixture
def test_db(temp_db_path):
    """Create a fresh test database instance."""
    db_module.DatabaseManager._instance = None

    db = db_module.DatabaseManager(temp_db_path)

    yield db

    db.close()
    db_module.DatabaseManager._instance = None


# =============================================================================
# Pipeline
# =============================================================================

@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_config():
    """Factory for GuildLogConfig snapshots built the way the store builds them."""

    def _make(logs=None, log_channels=None, log_channel_id=None, guild_id=GUILD_ID):
        return GuildLogConfig.from_record({
            "guild_id": str(guild_id),
            "logs": logs or {},
            "log_channels": log_channels or {},
            "log_channel_id": log_channel_id,
            "updated_at": 0.0,
        })

    return _make


@pytest.fixture
def mock_audit():
    """AuditResolver whose lookups all find nothing."""
    audit = MagicMock(spec=AuditResolver)
    audit.lookup_limit = 5
    audit.find_executor = AsyncMock(return_value=None)
    audit.find_member_remove_executor = AsyncMock(return_value=None)
    audit.find_member_update_executor = AsyncMock(return_value=None)
    audit.find_message_delete_executor = AsyncMock(return_value=None)
    audit.find_invite_delete_executor = AsyncMock(return_value=None)
    return audit


# =============================================================================
# Mock Discord Objects
# =============================================================================

def _make_channel(channel_id: int, name: str):
    channel = MagicMock()
    channel.id = channel_id
    channel.name = name
    channel.mention = f"<#{channel_id}>"
    channel.send = AsyncMock(return_value=MagicMock(id=555000000 + channel_id))
    return channel


@pytest.fixture
def mock_channels():
    """Channels that exist in the mock guild, keyed by id."""
    return {
        100: _make_channel(100, "server-logs"),
        200: _make_channel(200, "member-logs"),
    }


@pytest.fixture
def mock_discord_guild(mock_channels):
    """Create a mock Discord guild."""
    guild = MagicMock()
    guild.id = GUILD_ID
    guild.name = "Test Server"
    guild.get_channel = MagicMock(side_effect=lambda cid: mock_channels.get(cid))
    guild.audit_logs = MagicMock(side_effect=audit_logs_from({}))
    return guild


@pytest.fixture
def mock_discord_member(mock_discord_guild):
    """Create a mock Discord member."""
    from datetime import datetime, timezone
    member = MagicMock()
    member.id = 123456789
    member.name = "testuser"
    member.__str__.return_value = "testuser"
    member.nick = None
    member.bot = False
    member.created_at = datetime(2020, 9, 13, 12, 0, 0, tzinfo=timezone.utc)
    member.joined_at = datetime(2022, 4, 15, 10, 0, 0, tzinfo=timezone.utc)
    member.guild = mock_discord_guild
    member.roles = []
    member.mention = "<@123456789>"
    return member


@pytest.fixture
def mock_discord_moderator():
    """Create a mock Discord moderator."""
    mod = MagicMock()
    mod.id = 111222333
    mod.name = "moduser"
    mod.__str__.return_value = "moduser"
    mod.mention = "<@111222333>"
    return mod


@pytest.fixture
def audit_entry():
    """Factory for audit log entries."""
    return make_audit_entry


@pytest.fixture
def set_audit_logs(mock_discord_guild):
    """Make guild.audit_logs yield the given entries per action, or raise."""

    def _set(entries_by_action=None, error=None):
        mock_discord_guild.audit_logs = MagicMock(
            side_effect=audit_logs_from(entries_by_action or {}, error)
        )
        return mock_discord_guild.audit_logs

    return _set
