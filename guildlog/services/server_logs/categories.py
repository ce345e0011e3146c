"""
GuildLog - Categories
=====================

Log categories that events are routed to. The enum values are the keys
stored in each guild's config document.
"""

from enum import Enum


class LogCategory(Enum):
    """Log category, valued by its config key."""
    MEMBERS = "members"
    MESSAGE = "message"
    CHANNELS = "channels"
    ROLES = "roles"
    INVITES = "invites"
    EMOJIS = "emojis"
    VOICE = "voice"


CATEGORY_DESCRIPTIONS = {
    LogCategory.MEMBERS: "Joins, leaves, kicks, bans, unbans, nickname and role changes",
    LogCategory.MESSAGE: "Message edits and deletes, reactions added and removed",
    LogCategory.CHANNELS: "Channel and thread creation and deletion",
    LogCategory.ROLES: "Role creation, deletion, renames and permission changes",
    LogCategory.INVITES: "Invite creation and deletion",
    LogCategory.EMOJIS: "Custom emoji creation and deletion",
    LogCategory.VOICE: "Voice channel joins, leaves and switches",
}

CATEGORY_KEYS = frozenset(category.value for category in LogCategory)
