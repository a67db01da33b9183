from __future__ import annotations

"""
Entry Filtering.

Single source of truth for the hidden-entry rule, shared by the bounded
traversal and the subtree counter so both phases agree on what to skip.
"""

from typing import List


def is_hidden(name: str) -> bool:
    """
    Check whether a file or directory name denotes a hidden entry.

    Args:
        name: Base name of the entry (not a full path).

    Returns:
        bool: True if the name starts with '.' and is not exactly '.'.
    """
    return name.startswith(".") and name != "."


def visible_entries(names: List[str], show_hidden: bool) -> List[str]:
    """
    Drop hidden names unless hidden entries are requested.

    Args:
        names: Entry names of a single directory listing.
        show_hidden: Whether hidden entries are kept.

    Returns:
        List[str]: The names to process, in their original order.
    """
    if show_hidden:
        return list(names)
    return [n for n in names if not is_hidden(n)]
