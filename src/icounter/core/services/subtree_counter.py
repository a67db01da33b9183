from __future__ import annotations

"""
Subtree Inode Counter.

Counts every filesystem entry beneath a directory in a single unbounded
walk. This is the unit of work handed to parallel workers, so it touches
no shared state: it reads a path and a flag and returns an integer.
"""

import logging
import os
from typing import Optional

from icounter.core.pipeline.components.filters import visible_entries
from icounter.domain.errors import SubtreeCountError

logger = logging.getLogger(__name__)


def count_dir_inodes(path: str, show_hidden: bool) -> Optional[int]:
    """
    Count all files and directories strictly beneath a directory.

    Permission-denied entries are reported as a warning and excluded from
    the count. Any other I/O error aborts the walk. Symbolic links are
    counted as entries and never followed.

    Args:
        path: Directory whose subtree is counted.
        show_hidden: Whether hidden entries are included.

    Returns:
        Optional[int]: Number of entries below 'path', or None when 'path'
                       itself cannot be listed.

    Raises:
        SubtreeCountError: On a non-permission I/O error, tagged with the
                           path that failed.
    """
    # The starting directory is visited first and compensated at the end
    visited = 1

    def _on_error(err: OSError) -> None:
        nonlocal visited
        failed = err.filename if err.filename is not None else path
        if isinstance(err, PermissionError):
            logger.warning(f"Permission denied for: {failed}")
            visited -= 1
            return
        raise SubtreeCountError(str(failed), err)

    for _root, dirs, files in os.walk(path, onerror=_on_error):
        dirs[:] = visible_entries(dirs, show_hidden)
        visited += len(dirs) + len(visible_entries(files, show_hidden))

    # Denied children cancel out against their parent listing; only an
    # unreadable starting directory leaves the tally below one
    if visited < 1:
        return None
    return visited - 1
