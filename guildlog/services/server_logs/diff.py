"""
GuildLog - Set Diff
===================

Set difference in both directions, for roles and permissions.
"""

from typing import Hashable, Iterable, List, Set, Tuple, TypeVar

T = TypeVar("T", bound=Hashable)


def set_diff(old: Iterable[T], new: Iterable[T]) -> Tuple[Set[T], Set[T]]:
    """
    Compare two collections as sets.

    Returns:
        (added, removed) where added = new - old and removed = old - new.
    """
    old_set = set(old)
    new_set = set(new)
    return new_set - old_set, old_set - new_set


def enabled_permissions(permissions) -> List[str]:
    """Names of the permissions set to True on a discord.Permissions."""
    return [name for name, value in permissions if value]
