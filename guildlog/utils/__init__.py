"""
GuildLog - Utilities Package
============================
"""

from .async_utils import create_safe_task
from .error_handler import ErrorHandler

__all__ = ["create_safe_task", "ErrorHandler"]
