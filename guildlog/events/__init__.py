"""
GuildLog - Events Package
=========================

Event handler Cogs. Each Cog listens to one group of gateway events and
hands them to LoggingService.dispatch() with the matching formatter.

DESIGN:
    Cogs are loaded dynamically by the bot using load_extension().

    Event routing:
    - members.py: Join, leave, update, ban, unban
    - messages.py: Message delete/edit, reactions
    - channels.py: Channel and thread create/delete
    - guild.py: Roles, invites, emojis
    - voice.py: Voice channel join/leave/switch
"""

# =============================================================================
# Event Cog Registry
# =============================================================================

EVENT_COGS = [
    "guildlog.events.members",
    "guildlog.events.messages",
    "guildlog.events.channels",
    "guildlog.events.guild",
    "guildlog.events.voice",
]
"""Module paths the bot passes to load_extension() in setup_hook."""


__all__ = ["EVENT_COGS"]
