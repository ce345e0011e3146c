"""
GuildLog - Set Diff Tests
=========================
"""

import discord

from guildlog.services.server_logs.diff import enabled_permissions, set_diff


class TestSetDiff:

    def test_added_and_removed(self):
        added, removed = set_diff([1, 2, 3], [2, 3, 4])

        assert added == {4}
        assert removed == {1}

    def test_identical_is_empty(self):
        assert set_diff({1, 2}, [2, 1]) == (set(), set())

    def test_duplicates_and_order_ignored(self):
        assert set_diff([1, 1, 2], [2, 1, 2]) == (set(), set())

    def test_from_empty(self):
        assert set_diff([], ["a"]) == ({"a"}, set())

    def test_accepts_generators(self):
        added, removed = set_diff((i for i in range(3)), (i for i in range(1, 4)))

        assert added == {3}
        assert removed == {0}


class TestEnabledPermissions:

    def test_lists_only_granted(self):
        perms = discord.Permissions(ban_members=True, kick_members=True)

        assert sorted(enabled_permissions(perms)) == ["ban_members", "kick_members"]

    def test_none(self):
        assert enabled_permissions(discord.Permissions.none()) == []
