"""
GuildLog - Core Package
=======================

Configuration, logging, constants and the config store.
"""
