from __future__ import annotations

"""
Directory Hierarchy Builder.

Performs the bounded, pre-order traversal that seeds the NodeMap. Every
directory above the depth limit is listed here; directories sitting exactly
at the limit are recorded for deferred counting instead of being descended.
"""

import logging
import os
from typing import List, Tuple

from icounter.core.pipeline.components.filters import visible_entries
from icounter.domain.errors import MissingParentError, TraversalError
from icounter.domain.node_models import DirectoryNode, NodeMap, detach_node

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_hierarchy(
        root: str,
        max_depth: int,
        show_hidden: bool,
) -> Tuple[NodeMap, List[str]]:
    """
    Walk the tree under 'root' down to 'max_depth' and build the NodeMap.

    Directory nodes start with a count of 1 and receive +1 per direct file
    child. Symbolic links to directories are counted like files and never
    followed. The root is pre-seeded and never filtered. Hidden directories
    are pruned from the walk unless 'show_hidden' is set. A directory that
    cannot be listed is detached from its parent, as if it were absent.

    Args:
        root: Absolute path of the directory to count.
        max_depth: Depth of the bounded pass; entries directly under the
                   root are at depth 1. Values below 1 are raised to 1.
        show_hidden: Whether hidden entries are included.

    Returns:
        Tuple[NodeMap, List[str]]: (Hierarchy map, directories at the depth
                                   limit awaiting a deferred count).

    Raises:
        MissingParentError: If an entry is found before its parent node.
        TraversalError: On a non-permission I/O error while listing.
    """
    max_depth = max(max_depth, 1)

    nodes: NodeMap = {root: DirectoryNode(path=root)}
    deferred: List[str] = []

    def _on_walk_error(err: OSError) -> None:
        failed = err.filename if err.filename is not None else root
        if isinstance(err, PermissionError):
            logger.warning(f"Permission denied for: {failed}")
            # The root keeps its self count; there is nothing to detach it from
            if failed != root and failed in nodes:
                detach_node(nodes, failed)
            return
        raise TraversalError(str(failed), err)

    for dirpath, dirs, files in os.walk(root, onerror=_on_walk_error):
        entries = sorted(visible_entries(dirs, show_hidden))
        dirs[:] = [d for d in entries if not os.path.islink(os.path.join(dirpath, d))]
        depth = _entry_depth(root, dirpath) + 1

        for dir_name in dirs:
            path = os.path.join(dirpath, dir_name)
            nodes[path] = DirectoryNode(path=path)
            _parent_of(nodes, path).children.append(path)
            if depth == max_depth:
                deferred.append(path)

        links = [d for d in entries if d not in dirs]
        for entry_name in links + sorted(visible_entries(files, show_hidden)):
            _parent_of(nodes, os.path.join(dirpath, entry_name)).add_file()

        # Depth-limit directories are counted by workers, not walked here
        if depth == max_depth:
            dirs[:] = []

    logger.debug(f"Bounded traversal recorded {len(nodes)} directories, {len(deferred)} deferred.")
    return nodes, deferred

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _entry_depth(root: str, dirpath: str) -> int:
    """Depth of a walked directory relative to the root (root is 0)."""
    rel = os.path.relpath(dirpath, root)
    if rel == ".":
        return 0
    return rel.count(os.sep) + 1


def _parent_of(nodes: NodeMap, path: str) -> DirectoryNode:
    """Resolve the parent node of an entry or fail loudly."""
    parent = os.path.dirname(path)
    node = nodes.get(parent)
    if node is None:
        raise MissingParentError(path, parent)
    return node
