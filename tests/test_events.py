"""
GuildLog - Event Cog Tests
==========================

Cogs hand each gateway event to the logging service with the right
category and formatter, and filter what is never logged.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from guildlog.core.config import Config
from guildlog.events.guild import GuildEvents
from guildlog.events.members import MemberEvents
from guildlog.events.messages import MessageEvents
from guildlog.services.server_logs import LogCategory
from guildlog.services.server_logs.handlers import (
    format_emoji_create,
    format_emoji_delete,
    format_member_join,
    format_message_delete,
)


@pytest.fixture
def mock_bot():
    bot = MagicMock()
    bot.logging_service.dispatch = AsyncMock(return_value=None)
    return bot


@pytest.fixture
def message_events(mock_bot):
    cog = MessageEvents(mock_bot)
    cog.config = Config(discord_token="test-token", ignored_bot_ids={555})
    return cog


def _message(guild, author, content="hello"):
    message = MagicMock()
    message.guild = guild
    message.author = author
    message.content = content
    return message


class TestMemberEvents:

    @pytest.mark.asyncio
    async def test_join_dispatch(self, mock_bot, mock_discord_member, mock_discord_guild):
        await MemberEvents(mock_bot).on_member_join(mock_discord_member)

        mock_bot.logging_service.dispatch.assert_awaited_once_with(
            "on_member_join", mock_discord_guild, LogCategory.MEMBERS, format_member_join, mock_discord_member,
        )


class TestMessageEvents:

    @pytest.mark.asyncio
    async def test_delete_dispatch(self, message_events, mock_bot, mock_discord_guild, mock_discord_member):
        message = _message(mock_discord_guild, mock_discord_member)

        await message_events.on_message_delete(message)

        mock_bot.logging_service.dispatch.assert_awaited_once_with(
            "on_message_delete",
            mock_discord_guild,
            LogCategory.MESSAGE,
            format_message_delete,
            mock_discord_guild,
            message.channel,
            mock_discord_member,
            "hello",
        )

    @pytest.mark.asyncio
    async def test_bot_author_skipped(self, message_events, mock_bot, mock_discord_guild):
        author = MagicMock(bot=True, id=1)

        await message_events.on_message_delete(_message(mock_discord_guild, author))

        mock_bot.logging_service.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_ignored_id_skipped(self, message_events, mock_bot, mock_discord_guild):
        author = MagicMock(bot=False, id=555)

        await message_events.on_message_edit(
            _message(mock_discord_guild, author, "a"),
            _message(mock_discord_guild, author, "b"),
        )

        mock_bot.logging_service.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_direct_message_skipped(self, message_events, mock_bot, mock_discord_member):
        await message_events.on_message_delete(_message(None, mock_discord_member))

        mock_bot.logging_service.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_raw_delete_of_uncached_message(self, message_events, mock_bot, mock_discord_guild):
        mock_bot.get_guild.return_value = mock_discord_guild
        payload = MagicMock(cached_message=None, guild_id=mock_discord_guild.id, channel_id=100)

        await message_events.on_raw_message_delete(payload)

        args = mock_bot.logging_service.dispatch.await_args.args
        assert args[0] == "on_raw_message_delete"
        assert args[3] is format_message_delete
        assert args[6:] == (None, None)
        mock_discord_guild.get_channel_or_thread.assert_called_once_with(100)

    @pytest.mark.asyncio
    async def test_raw_delete_of_cached_message_ignored(self, message_events, mock_bot):
        """Test cached deletes are left to on_message_delete."""
        payload = MagicMock(cached_message=MagicMock(), guild_id=1)

        await message_events.on_raw_message_delete(payload)

        mock_bot.logging_service.dispatch.assert_not_called()


class TestEmojiEvents:

    @pytest.mark.asyncio
    async def test_bulk_update_split_per_emoji(self, mock_bot, mock_discord_guild):
        kept = MagicMock(id=1)
        removed = MagicMock(id=2)
        added = MagicMock(id=3)

        await GuildEvents(mock_bot).on_guild_emojis_update(mock_discord_guild, [kept, removed], [kept, added])

        calls = mock_bot.logging_service.dispatch.await_args_list
        assert len(calls) == 2
        assert calls[0].args[3:] == (format_emoji_create, added)
        assert calls[1].args[3:] == (format_emoji_delete, removed)
        assert all(call.args[2] is LogCategory.EMOJIS for call in calls)
