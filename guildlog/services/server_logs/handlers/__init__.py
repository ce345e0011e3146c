"""
GuildLog - Log Formatters
=========================

One async formatter per event type. Each takes the audit resolver and
the event payload, and returns an embed or None when nothing tracked
changed. Formatters never send and never route.
"""

from .members import (
    format_member_join,
    format_member_remove,
    format_member_update,
    format_ban_add,
    format_ban_remove,
)
from .channels import (
    format_channel_create,
    format_channel_delete,
    format_thread_create,
    format_thread_delete,
)
from .roles import format_role_create, format_role_delete, format_role_update
from .invites import format_invite_create, format_invite_delete
from .emojis import format_emoji_create, format_emoji_delete
from .messages import (
    format_message_delete,
    format_message_edit,
    format_reaction_add,
    format_reaction_remove,
)
from .voice import format_voice_state

__all__ = [
    "format_member_join",
    "format_member_remove",
    "format_member_update",
    "format_ban_add",
    "format_ban_remove",
    "format_channel_create",
    "format_channel_delete",
    "format_thread_create",
    "format_thread_delete",
    "format_role_create",
    "format_role_delete",
    "format_role_update",
    "format_invite_create",
    "format_invite_delete",
    "format_emoji_create",
    "format_emoji_delete",
    "format_message_delete",
    "format_message_edit",
    "format_reaction_add",
    "format_reaction_remove",
    "format_voice_state",
]
