"""
GuildLog - Log Formatter Tests
==============================

Embeds built for each event, and the update events that must produce
nothing when no tracked field changed.
"""

from unittest.mock import MagicMock

import discord
import pytest

from guildlog.core.config import EmbedColors
from guildlog.services.server_logs import AuditResult
from guildlog.services.server_logs.formatting import format_actor, truncate_text
from guildlog.services.server_logs.handlers import (
    format_ban_add,
    format_emoji_create,
    format_invite_create,
    format_member_join,
    format_member_remove,
    format_member_update,
    format_message_delete,
    format_message_edit,
    format_reaction_add,
    format_role_update,
    format_voice_state,
)


def _fields(embed: discord.Embed) -> dict:
    return {field.name: field.value for field in embed.fields}


def _role(role_id, name="Mods", permissions=None, mentionable=False, color=0):
    role = MagicMock()
    role.id = role_id
    role.name = name
    role.permissions = permissions if permissions is not None else discord.Permissions.none()
    role.mentionable = mentionable
    role.color = color
    return role


def _voice(channel):
    state = MagicMock()
    state.channel = channel
    return state


def _voice_channel(channel_id, name):
    channel = MagicMock()
    channel.id = channel_id
    channel.mention = f"<#{channel_id}>"
    channel.name = name
    return channel


# =============================================================================
# Formatting Helpers
# =============================================================================

class TestFormattingHelpers:

    def test_truncate_keeps_short_text(self):
        assert truncate_text("hello") == "hello"

    def test_truncate_to_field_limit(self):
        text = truncate_text("x" * 2000)

        assert len(text) == 1024
        assert text.endswith("...")

    def test_truncate_exact_limit_untouched(self):
        assert truncate_text("x" * 1024) == "x" * 1024

    def test_actor_unknown(self):
        assert format_actor(None) == "Unknown"

    def test_actor_mention(self, mock_discord_moderator):
        result = AuditResult(executor=mock_discord_moderator, action=discord.AuditLogAction.kick)

        assert format_actor(result) == "<@111222333> (moduser)"


# =============================================================================
# Members
# =============================================================================

class TestMemberFormatters:

    @pytest.mark.asyncio
    async def test_member_join(self, mock_audit, mock_discord_member):
        embed = await format_member_join(mock_audit, mock_discord_member)

        assert embed.title == "Member Joined"
        assert embed.colour.value == EmbedColors.MEMBER_JOIN
        assert "testuser (123456789)" in embed.description
        assert _fields(embed)["Joined At"].startswith("<t:")

    @pytest.mark.asyncio
    async def test_member_remove_left(self, mock_audit, mock_discord_member):
        """Test a removal with no audit entry reads as a plain leave."""
        embed = await format_member_remove(mock_audit, mock_discord_member)

        assert embed.title == "Member Left"
        assert _fields(embed)["Reason"] == "Left or unknown"
        assert _fields(embed)["By"] == "Unknown"

    @pytest.mark.asyncio
    async def test_member_remove_kicked(self, mock_audit, mock_discord_member, mock_discord_moderator):
        mock_audit.find_member_remove_executor.return_value = AuditResult(
            executor=mock_discord_moderator,
            action=discord.AuditLogAction.kick,
        )

        embed = await format_member_remove(mock_audit, mock_discord_member)

        assert _fields(embed)["Reason"] == "Kicked"
        assert _fields(embed)["By"] == "moduser (111222333)"

    @pytest.mark.asyncio
    async def test_member_remove_banned(self, mock_audit, mock_discord_member, mock_discord_moderator):
        mock_audit.find_member_remove_executor.return_value = AuditResult(
            executor=mock_discord_moderator,
            action=discord.AuditLogAction.ban,
        )

        embed = await format_member_remove(mock_audit, mock_discord_member)

        assert _fields(embed)["Reason"] == "Banned"

    @pytest.mark.asyncio
    async def test_ban_add_reason(self, mock_audit, mock_discord_guild, mock_discord_member, mock_discord_moderator):
        mock_audit.find_executor.return_value = AuditResult(
            executor=mock_discord_moderator,
            action=discord.AuditLogAction.ban,
            reason="spam",
        )

        embed = await format_ban_add(mock_audit, mock_discord_guild, mock_discord_member)

        assert embed.title == "Member Banned"
        assert _fields(embed)["Reason"] == "spam"
        assert _fields(embed)["Banned By"] == "<@111222333> (moduser)"

    @pytest.mark.asyncio
    async def test_ban_add_without_reason(self, mock_audit, mock_discord_guild, mock_discord_member):
        embed = await format_ban_add(mock_audit, mock_discord_guild, mock_discord_member)

        assert _fields(embed)["Reason"] == "No reason provided"
        assert _fields(embed)["Banned By"] == "Unknown"


class TestMemberUpdate:

    @pytest.mark.asyncio
    async def test_no_change_produces_nothing(self, mock_audit, mock_discord_member):
        """Test an update where no tracked field differs emits nothing."""
        role = _role(1)
        mock_discord_member.roles = [role]

        embed = await format_member_update(mock_audit, mock_discord_member, mock_discord_member)

        assert embed is None
        mock_audit.find_member_update_executor.assert_not_called()

    @pytest.mark.asyncio
    async def test_role_reorder_produces_nothing(self, mock_audit, mock_discord_member):
        before = MagicMock(nick="a", roles=[_role(1), _role(2)])
        after = MagicMock(nick="a", roles=[_role(2), _role(1)], guild=mock_discord_member.guild)

        assert await format_member_update(mock_audit, before, after) is None

    @pytest.mark.asyncio
    async def test_nickname_change(self, mock_audit, mock_discord_member):
        before = MagicMock(nick=None, roles=[])
        mock_discord_member.nick = "New Nick"

        embed = await format_member_update(mock_audit, before, mock_discord_member)

        assert embed.title == "Member Updated"
        assert _fields(embed)["Nickname"] == '"None" ➜ "New Nick"'
        assert _fields(embed)["Updated By"] == "Unknown"

    @pytest.mark.asyncio
    async def test_roles_added_and_removed(self, mock_audit, mock_discord_member):
        before = MagicMock(nick=None, roles=[_role(1), _role(2)])
        mock_discord_member.roles = [_role(2), _role(3)]

        embed = await format_member_update(mock_audit, before, mock_discord_member)

        fields = _fields(embed)
        assert fields["Roles Added"] == "<@&3>"
        assert fields["Roles Removed"] == "<@&1>"
        mock_audit.find_member_update_executor.assert_awaited_once_with(
            mock_discord_member.guild, mock_discord_member.id
        )


# =============================================================================
# Roles
# =============================================================================

class TestRoleUpdate:

    @pytest.mark.asyncio
    async def test_mentionable_only_produces_nothing(self, mock_audit, mock_discord_guild):
        """Test flags other than name and permissions are not tracked."""
        before = _role(5, mentionable=False, color=0x111111)
        after = _role(5, mentionable=True, color=0x222222)
        after.guild = mock_discord_guild

        assert await format_role_update(mock_audit, before, after) is None
        mock_audit.find_executor.assert_not_called()

    @pytest.mark.asyncio
    async def test_permission_diff(self, mock_audit, mock_discord_guild):
        before = _role(5, permissions=discord.Permissions(kick_members=True))
        after = _role(5, permissions=discord.Permissions(ban_members=True))
        after.guild = mock_discord_guild

        embed = await format_role_update(mock_audit, before, after)

        fields = _fields(embed)
        assert fields["Permissions Added"] == "+ ban_members"
        assert fields["Permissions Removed"] == "- kick_members"
        assert "Name" not in fields
        mock_audit.find_executor.assert_awaited_once_with(
            mock_discord_guild, discord.AuditLogAction.role_update, 5
        )

    @pytest.mark.asyncio
    async def test_rename(self, mock_audit, mock_discord_guild):
        before = _role(5, name="Mods")
        after = _role(5, name="Moderators")
        after.guild = mock_discord_guild

        embed = await format_role_update(mock_audit, before, after)

        assert embed.title == "Role Updated"
        assert _fields(embed)["Name"] == '"Mods" ➜ "Moderators"'


# =============================================================================
# Voice
# =============================================================================

class TestVoiceState:

    @pytest.mark.asyncio
    async def test_join(self, mock_audit, mock_discord_member):
        lounge = _voice_channel(300, "Lounge")

        embed = await format_voice_state(mock_audit, mock_discord_member, _voice(None), _voice(lounge))

        assert embed.title == "Joined VC"
        assert embed.colour.value == EmbedColors.VOICE
        assert _fields(embed)["Channel"] == "<#300>"

    @pytest.mark.asyncio
    async def test_leave(self, mock_audit, mock_discord_member):
        lounge = _voice_channel(300, "Lounge")

        embed = await format_voice_state(mock_audit, mock_discord_member, _voice(lounge), _voice(None))

        assert embed.title == "Left VC"

    @pytest.mark.asyncio
    async def test_switch(self, mock_audit, mock_discord_member):
        lounge = _voice_channel(300, "Lounge")
        gaming = _voice_channel(301, "Gaming")

        embed = await format_voice_state(mock_audit, mock_discord_member, _voice(lounge), _voice(gaming))

        assert embed.title == "Switched VC"
        assert _fields(embed)["Channel"] == "<#300> ➜ <#301>"

    @pytest.mark.asyncio
    async def test_mute_in_same_channel_produces_nothing(self, mock_audit, mock_discord_member):
        lounge = _voice_channel(300, "Lounge")

        assert await format_voice_state(mock_audit, mock_discord_member, _voice(lounge), _voice(lounge)) is None


# =============================================================================
# Messages
# =============================================================================

class TestMessageFormatters:

    @pytest.mark.asyncio
    async def test_edit_same_content_produces_nothing(self, mock_audit, mock_discord_member, mock_channels):
        """Test an edit event whose text did not change (embed unfurl) emits nothing."""
        embed = await format_message_edit(mock_audit, "hello", "hello", mock_discord_member, mock_channels[100])

        assert embed is None

    @pytest.mark.asyncio
    async def test_edit(self, mock_audit, mock_discord_member, mock_channels):
        embed = await format_message_edit(mock_audit, "hello", "hello world", mock_discord_member, mock_channels[100])

        fields = _fields(embed)
        assert embed.title == "Message Edited"
        assert fields["Before"] == "hello"
        assert fields["After"] == "hello world"
        assert fields["Channel"] == "<#100>"

    @pytest.mark.asyncio
    async def test_delete_uncached(self, mock_audit, mock_discord_guild, mock_channels):
        """Test a delete with unknown author and content still renders."""
        embed = await format_message_delete(mock_audit, mock_discord_guild, mock_channels[100], None, None)

        assert embed.title == "Message Deleted"
        assert embed.description == "(no content)"
        assert _fields(embed)["Author"] == "Unknown"

    @pytest.mark.asyncio
    async def test_delete_truncates_description(
        self, mock_audit, mock_discord_guild, mock_channels, mock_discord_member
    ):
        embed = await format_message_delete(
            mock_audit, mock_discord_guild, mock_channels[100], mock_discord_member, "y" * 3000
        )

        assert len(embed.description) == 2048
        assert embed.description.endswith("...")
        mock_audit.find_message_delete_executor.assert_awaited_once_with(
            mock_discord_guild, mock_discord_member.id, 100
        )

    @pytest.mark.asyncio
    async def test_reaction_add(self, mock_audit, mock_discord_member, mock_channels):
        reaction = MagicMock()
        reaction.emoji = "👍"
        reaction.message.jump_url = "https://discord.com/channels/1/100/5"
        reaction.message.channel = mock_channels[100]
        reaction.message.author.__str__.return_value = "author"

        embed = await format_reaction_add(mock_audit, reaction, mock_discord_member)

        assert embed.title == "Reaction Added"
        assert embed.description == "testuser reacted with 👍 to [message](https://discord.com/channels/1/100/5)"
        assert _fields(embed)["Message Author"] == "author"


# =============================================================================
# Invites & Emojis
# =============================================================================

class TestInviteAndEmojiFormatters:

    @pytest.mark.asyncio
    async def test_invite_unlimited_never_expires(self, mock_audit, mock_channels, mock_discord_moderator):
        invite = MagicMock()
        invite.code = "abc123"
        invite.channel = mock_channels[100]
        invite.max_uses = 0
        invite.expires_at = None
        invite.inviter = mock_discord_moderator

        embed = await format_invite_create(mock_audit, invite)

        fields = _fields(embed)
        assert embed.description == "Invite code: abc123"
        assert fields["Max Uses"] == "Unlimited"
        assert fields["Expires"] == "Never"
        assert fields["Created By"] == "<@111222333> (moduser)"

    @pytest.mark.asyncio
    async def test_emoji_create(self, mock_audit, mock_discord_guild):
        emoji = MagicMock()
        emoji.id = 777
        emoji.name = "pepe"
        emoji.animated = True
        emoji.guild = mock_discord_guild
        emoji.__str__.return_value = "<a:pepe:777>"

        embed = await format_emoji_create(mock_audit, emoji)

        assert embed.title == "Emoji Created"
        assert embed.description == "<a:pepe:777> (pepe)"
        assert _fields(embed)["Animated"] == "Yes"
        mock_audit.find_executor.assert_awaited_once_with(
            mock_discord_guild, discord.AuditLogAction.emoji_create, 777
        )
