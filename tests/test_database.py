"""
GuildLog - Database Tests
=========================

Guild config persistence and the async store adapter.
"""

import pytest

from guildlog.services.server_logs import GuildConfigStore, LogCategory

GUILD_ID = 987654321


class TestGuildConfigs:
    """Test guild_configs table operations."""

    def test_missing_config(self, test_db):
        assert test_db.get_guild_config(GUILD_ID) is None

    def test_save_and_load(self, test_db):
        saved = test_db.save_guild_config(
            GUILD_ID,
            {"members": True, "voice": False},
            {"members": "200"},
            "100",
        )

        loaded = test_db.get_guild_config(GUILD_ID)

        assert loaded["guild_id"] == str(GUILD_ID)
        assert loaded["logs"] == {"members": True, "voice": False}
        assert loaded["log_channels"] == {"members": "200"}
        assert loaded["log_channel_id"] == "100"
        assert loaded["updated_at"] == pytest.approx(saved["updated_at"])

    def test_save_replaces_document(self, test_db):
        test_db.save_guild_config(GUILD_ID, {"members": True}, {"members": "200"}, "100")
        test_db.save_guild_config(GUILD_ID, {"roles": True}, {}, None)

        loaded = test_db.get_guild_config(GUILD_ID)

        assert loaded["logs"] == {"roles": True}
        assert loaded["log_channels"] == {}
        assert loaded["log_channel_id"] is None

    def test_configured_guild_ids(self, test_db):
        test_db.save_guild_config(1, {}, {}, None)
        test_db.save_guild_config(3, {}, {}, None)

        assert test_db.get_configured_guild_ids([1, 2, 3]) == {1, 3}
        assert test_db.get_configured_guild_ids([]) == set()

    def test_delete(self, test_db):
        test_db.save_guild_config(GUILD_ID, {"members": True}, {}, None)

        assert test_db.delete_guild_config(GUILD_ID) is True
        assert test_db.delete_guild_config(GUILD_ID) is False
        assert test_db.get_guild_config(GUILD_ID) is None

    def test_corrupted_json_reads_empty(self, test_db):
        test_db.save_guild_config(GUILD_ID, {"members": True}, {}, None)
        test_db.execute("UPDATE guild_configs SET logs = ? WHERE guild_id = ?", ("{not json", str(GUILD_ID)))

        assert test_db.get_guild_config(GUILD_ID)["logs"] == {}

    def test_reconnects_after_close(self, test_db):
        test_db.save_guild_config(GUILD_ID, {"members": True}, {}, None)
        test_db.close()

        assert test_db.get_guild_config(GUILD_ID) is not None


class TestGuildConfigStore:

    @pytest.mark.asyncio
    async def test_fetch_snapshot(self, test_db):
        test_db.save_guild_config(GUILD_ID, {"members": True, "bogus": True}, {"members": "200"}, "100")

        config = await GuildConfigStore(test_db).fetch(GUILD_ID)

        assert config.guild_id == GUILD_ID
        assert config.is_enabled(LogCategory.MEMBERS)
        assert "bogus" not in config.logs_enabled
        assert config.channel_id_for(LogCategory.MEMBERS) == 200
        assert config.channel_id_for(LogCategory.ROLES) == 100

    @pytest.mark.asyncio
    async def test_fetch_missing(self, test_db):
        assert await GuildConfigStore(test_db).fetch(GUILD_ID) is None
