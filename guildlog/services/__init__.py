"""
GuildLog - Services Package
===========================
"""
