"""
GuildLog
========

Discord audit-log bot that posts guild events to per-category log
channels, with a dashboard for administrators to configure routing.
"""

__version__ = "1.0.0"
